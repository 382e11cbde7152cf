"""
Map an open file in one worktree to the same file in another.
"""

import logging
import os

from .paths import is_descendant, normalize_path

logger = logging.getLogger(__name__)


def find_corresponding_file(
    current_root: str | None,
    current_file: str | None,
    target_root: str,
) -> str | None:
    """
    Find the file in ``target_root`` at the same relative position as ``current_file``.

    Read-only and safe to call speculatively.

    Args:
        current_root: Root of the worktree the file belongs to
        current_file: File currently open (None or empty if nothing is open)
        target_root: Root of the worktree being switched to

    Returns:
        Path of the corresponding file if it exists, otherwise None.
        Also None when no file is open or the file lives outside
        ``current_root`` (e.g. a scratch buffer).
    """
    if not current_root or not current_file:
        return None

    root = normalize_path(current_root)
    file_path = normalize_path(current_file)
    target = normalize_path(target_root)

    if not is_descendant(file_path, root):
        logger.debug(f"{file_path} is outside worktree {root}")
        return None

    relative = os.path.relpath(file_path, root)
    candidate = os.path.join(target, relative)

    if os.path.exists(candidate):
        return candidate

    logger.debug(f"No counterpart for {relative} in {target}")
    return None
