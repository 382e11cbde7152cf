"""
Git worktree registry, path resolution and switching.

Example:
    >>> from wtswitch.core.worktree import WorktreeService
    >>> service = WorktreeService(config, prompter, workspace, notifier)
    >>> result = service.switch()
    >>> print(result.message)
"""

from .correspondence import find_corresponding_file
from .errors import (
    CommandFailedError,
    InvalidInputError,
    NoRepositoryError,
    NotAWorktreeError,
    NothingToDoError,
    SpawnFailureError,
    TargetMissingError,
    WorktreeError,
)
from .git import GitRepository
from .models import (
    CreateState,
    DeleteState,
    FlowResult,
    SelectionItem,
    SwitchState,
    Worktree,
    WorktreeRegistry,
)
from .parser import parse_worktree_list
from .paths import normalize_path, resolve_base_path, resolve_worktree_path
from .runner import CommandResult, GitRunner
from .service import WorktreeService
from .ui import DeferredScheduler, Notifier, Prompter, Scheduler, Workspace

__all__ = [
    "WorktreeService",
    "GitRepository",
    "GitRunner",
    "CommandResult",
    "Worktree",
    "WorktreeRegistry",
    "SelectionItem",
    "FlowResult",
    "CreateState",
    "DeleteState",
    "SwitchState",
    "parse_worktree_list",
    "normalize_path",
    "resolve_base_path",
    "resolve_worktree_path",
    "find_corresponding_file",
    "Prompter",
    "Workspace",
    "Notifier",
    "Scheduler",
    "DeferredScheduler",
    "WorktreeError",
    "NoRepositoryError",
    "InvalidInputError",
    "SpawnFailureError",
    "CommandFailedError",
    "TargetMissingError",
    "NotAWorktreeError",
    "NothingToDoError",
]
