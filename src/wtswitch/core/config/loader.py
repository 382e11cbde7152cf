"""
Configuration loading with multi-layer merging.

Precedence chain, lowest first:
    defaults < user config < project config < env vars

Nothing is cached: every call reads the layers again and returns a new
WorktreesConfig for the caller to hand to the service.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import WorktreesConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".wtswitch.json"

# Env var -> config key
ENV_OVERRIDES = {
    "WTSWITCH_BASE_PATH": "base_path",
    "WTSWITCH_PATH_TEMPLATE": "path_template",
}


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/wtswitch/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "wtswitch" / "config.json"


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        project_dir: Project root (defaults to current directory)
    """
    if project_dir is None:
        project_dir = Path.cwd()
    return project_dir / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`; nested dicts
    are merged rather than replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON object from a file.

    Returns:
        Parsed dict, or None if the file is missing, unreadable or not an object
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning(f"Ignoring config at {path}: top level is not an object")
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides.

    Supported env vars:
        WTSWITCH_BASE_PATH - overrides base_path
        WTSWITCH_PATH_TEMPLATE - overrides path_template
    """
    result = config_dict.copy()

    for env_var, key in ENV_OVERRIDES.items():
        if value := os.environ.get(env_var):
            result[key] = value

    return result


def get_default_config() -> dict[str, Any]:
    """Hardcoded defaults."""
    return {
        "base_path": "..",
        "path_template": "{branch}",
    }


def load_config(project_dir: Path | None = None) -> WorktreesConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (WTSWITCH_*)
        2. Project config (.wtswitch.json)
        3. User config (~/.config/wtswitch/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Directory holding .wtswitch.json (defaults to cwd)

    Returns:
        Validated WorktreesConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    return WorktreesConfig(**merged)
