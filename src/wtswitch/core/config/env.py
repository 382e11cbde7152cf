"""Environment loading helpers.

Layered .env support, lowest precedence first:
- user env file (~/.config/wtswitch/.env)
- project env files (.env, .env.local)
- OS environment (never overridden)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values


def _read_env(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    values = dotenv_values(path)
    out: dict[str, str] = {}
    for k, v in values.items():
        if k is None or v is None:
            continue
        out[str(k)] = str(v)
    return out


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> None:
    """Load environment variables from user + project .env files.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Notes:
        Keys set from the user env file may be overridden by project env
        files. Keys present before loading are never touched.
    """
    if project_dir is None:
        project_dir = Path.cwd()

    if user_env_paths is None:
        xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        user_env_paths = [xdg_home / "wtswitch" / ".env"]

    if project_env_paths is None:
        project_env_paths = [project_dir / ".env", project_dir / ".env.local"]

    user_set_keys: set[str] = set()
    for p in user_env_paths:
        for k, v in _read_env(Path(p)).items():
            if k not in os.environ:
                os.environ[k] = v
                user_set_keys.add(k)

    for p in project_env_paths:
        for k, v in _read_env(Path(p)).items():
            if k not in os.environ or k in user_set_keys:
                os.environ[k] = v
