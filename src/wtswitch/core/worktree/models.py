"""
Worktree data models.

Defines the worktree record, the path-keyed registry snapshot, selection
entries for the prompt layer, and the results and states of the create,
delete and switch flows.
"""

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from .paths import normalize_path

BRANCH_REF_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class Worktree:
    """
    A non-bare git worktree.

    Attributes:
        path: Normalized absolute path to the worktree directory
        branch: Full branch ref (None for detached HEAD)
        commit: HEAD commit SHA, if reported
    """

    path: str
    branch: str | None = None
    commit: str | None = None

    @property
    def name(self) -> str | None:
        """Short branch name, or None when detached."""
        if self.branch is None:
            return None
        if self.branch.startswith(BRANCH_REF_PREFIX):
            return self.branch[len(BRANCH_REF_PREFIX) :]
        return self.branch

    @property
    def display_name(self) -> str:
        """Branch name, falling back to the directory name."""
        return self.name or os.path.basename(self.path)

    @property
    def label(self) -> str:
        return f"{self.display_name} ({self.path})"


class WorktreeRegistry(Mapping[str, Worktree]):
    """
    Snapshot of the repository's worktrees keyed by normalized path.

    Lookups normalize the key first, so ``"/wt/a/"`` and ``"/wt/./a"`` both
    find the worktree at ``/wt/a``. A registry is never cached between
    operations; each one asks git for a fresh snapshot.
    """

    def __init__(self, worktrees: dict[str, Worktree] | None = None):
        self._worktrees: dict[str, Worktree] = {}
        for worktree in (worktrees or {}).values():
            self.add(worktree)

    def add(self, worktree: Worktree) -> None:
        """Insert a worktree, replacing any earlier entry for the same path."""
        self._worktrees[normalize_path(worktree.path)] = worktree

    def __getitem__(self, path: str) -> Worktree:
        return self._worktrees[normalize_path(path)]

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return normalize_path(path) in self._worktrees

    def __iter__(self) -> Iterator[str]:
        return iter(self._worktrees)

    def __len__(self) -> int:
        return len(self._worktrees)

    def __repr__(self) -> str:
        return f"WorktreeRegistry({list(self._worktrees)!r})"


@dataclass(frozen=True)
class SelectionItem:
    """One entry offered to the selection prompt."""

    label: str
    path: str


@dataclass
class FlowResult:
    """
    Outcome of an interactive flow, as reported to the UI layer.

    Attributes:
        ok: Whether the flow reached a success state
        message: Human-readable outcome
        state: Terminal state of the flow
        path: Worktree path the flow acted on, if any
        file: File opened after a switch, if a counterpart was found
    """

    ok: bool
    message: str
    state: str
    path: str | None = None
    file: str | None = None


class CreateState(str, Enum):
    """States of the create flow."""

    AWAITING_BRANCH = "awaiting_branch"
    AWAITING_PATH = "awaiting_path"
    RESOLVING = "resolving"
    ENSURING_BRANCH = "ensuring_branch"
    CREATING_WORKTREE = "creating_worktree"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"


class DeleteState(str, Enum):
    """States of the delete flow."""

    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    DELETING = "deleting"
    SUCCESS = "success"
    FAILED = "failed"
    NOTHING_TO_DO = "nothing_to_do"
    CANCELLED = "cancelled"


class SwitchState(str, Enum):
    """States of the switch flow."""

    AWAITING_SELECTION = "awaiting_selection"
    VALIDATING = "validating"
    RESOLVING_CORRESPONDENCE = "resolving_correspondence"
    SWITCHING = "switching"
    SUCCESS = "success"
    SUCCESS_NO_CORRESPONDENCE = "success_no_correspondence"
    FAILED = "failed"
    NOTHING_TO_DO = "nothing_to_do"
    CANCELLED = "cancelled"
