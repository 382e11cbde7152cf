"""
Path resolution for worktrees.

All normalization here is lexical: ``~`` is expanded, relative paths are made
absolute, ``.``/``..`` segments and duplicate or trailing separators are
collapsed. Symlinks are never resolved, so two spellings of the same
directory through different symlinks stay different.
"""

import os
from pathlib import Path

from .errors import NoRepositoryError

# Substitution token for the branch name in path templates
BRANCH_TOKEN = "{branch}"


def normalize_path(path: str | Path) -> str:
    """
    Lexically normalize a path into an absolute string.

    Example:
        >>> normalize_path("/repo/./wt//feature/")
        '/repo/wt/feature'
    """
    return os.path.abspath(os.path.expanduser(str(path)))


def is_descendant(path: str, root: str) -> bool:
    """
    Check whether ``path`` lies strictly below ``root``.

    Both arguments must already be normalized. The check works on whole path
    components, so ``/wt/a`` is not an ancestor of ``/wt/ab/file``.
    """
    if path == root:
        return False
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


def resolve_base_path(common_dir: str | None, base_path: str) -> str:
    """
    Compute the directory new worktrees are created under.

    Args:
        common_dir: The repository's shared git directory (None if unknown)
        base_path: Configured anchor, relative to ``common_dir``

    Returns:
        Normalized absolute base directory

    Raises:
        NoRepositoryError: If ``common_dir`` is not available
    """
    if not common_dir:
        raise NoRepositoryError()
    return normalize_path(os.path.join(common_dir, base_path))


def expand_template(template: str, branch: str) -> str:
    """Substitute the branch name for every placeholder in a path template."""
    return template.replace(BRANCH_TOKEN, branch)


def resolve_worktree_path(
    base_path: str,
    user_path: str | None,
    template: str,
    branch: str,
) -> str:
    """
    Resolve the target directory for a new worktree.

    A non-blank ``user_path`` wins: absolute paths are used as given, relative
    ones are taken relative to ``base_path``. Otherwise the branch is
    substituted into ``template`` and joined onto ``base_path``.

    This is a pure function: it never touches the filesystem.

    Args:
        base_path: Normalized base directory for worktrees
        user_path: Optional path typed by the user
        template: Path template containing ``{branch}``
        branch: Branch name

    Returns:
        Normalized absolute worktree path
    """
    user_path = user_path.strip() if user_path else ""

    if user_path:
        expanded = os.path.expanduser(user_path)
        if os.path.isabs(expanded):
            return normalize_path(expanded)
        return normalize_path(os.path.join(base_path, expanded))

    return normalize_path(os.path.join(base_path, expand_template(template, branch)))
