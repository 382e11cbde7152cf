"""
Parser for ``git worktree list --porcelain`` output.

The porcelain format is one block per worktree, blocks separated by a blank
line::

    worktree /repo
    HEAD 1f2e3d...
    branch refs/heads/main

    worktree /repo-feature
    HEAD 4a5b6c...
    detached
"""

import logging

from .models import Worktree, WorktreeRegistry
from .paths import normalize_path

logger = logging.getLogger(__name__)


def split_blocks(output: str) -> list[list[str]]:
    """Split porcelain output into blocks of non-empty lines."""
    blocks: list[list[str]] = []
    current: list[str] = []

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            if current:
                blocks.append(current)
                current = []
            continue
        current.append(line)

    # Last block when output has no trailing blank line
    if current:
        blocks.append(current)

    return blocks


def parse_block(lines: list[str]) -> Worktree | None:
    """
    Parse one porcelain block.

    Returns:
        The worktree, or None for a bare entry or a block without a
        ``worktree`` line
    """
    path: str | None = None
    branch: str | None = None
    commit: str | None = None
    is_bare = False

    for line in lines:
        if line.startswith("worktree "):
            path = line[len("worktree ") :]
        elif line.startswith("branch "):
            branch = line[len("branch ") :]
        elif line.startswith("HEAD "):
            commit = line[len("HEAD ") :]
        elif line == "bare":
            is_bare = True

    if path is None:
        logger.debug(f"Dropping porcelain block without a worktree line: {lines!r}")
        return None
    if is_bare:
        return None

    return Worktree(path=normalize_path(path), branch=branch, commit=commit)


def parse_worktree_list(output: str) -> WorktreeRegistry:
    """
    Build a registry from porcelain output.

    Bare entries are left out. If two blocks name the same path, the later
    one wins. Empty output gives an empty registry.
    """
    registry = WorktreeRegistry()
    for block in split_blocks(output):
        worktree = parse_block(block)
        if worktree is not None:
            registry.add(worktree)
    return registry
