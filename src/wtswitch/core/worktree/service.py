"""
Worktree service: create, delete and switch.

The service sequences git commands, path resolution and file correspondence
for the three worktree operations. It exposes two layers:

- Programmatic operations (``create_worktree``, ``delete_worktree``,
  ``switch_worktree``) that raise ``WorktreeError`` subclasses.
- Interactive flows (``create``, ``delete``, ``switch``) that drive a
  ``Prompter``, report through a ``Notifier`` and always return a
  ``FlowResult``.

Each flow moves through explicit states (``CreateState``, ``DeleteState``,
``SwitchState``). Cancellation is only observed at prompt suspension points
and never interrupts a git process that is already running.
"""

import logging
import os
from enum import Enum

from wtswitch.core.config.models import WorktreesConfig

from .correspondence import find_corresponding_file
from .errors import (
    InvalidInputError,
    NotAWorktreeError,
    NothingToDoError,
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
from .paths import normalize_path, resolve_base_path, resolve_worktree_path
from .ui import DeferredScheduler, Notifier, Prompter, Scheduler, Workspace

logger = logging.getLogger(__name__)


def selection_items(worktrees: list[Worktree]) -> list[SelectionItem]:
    """Build ``"<name> (<path>)"`` entries in the given order."""
    return [SelectionItem(label=wt.label, path=wt.path) for wt in worktrees]


class WorktreeService:
    """
    Orchestrates worktree operations for one editing session.

    Configuration is passed in and never mutated. The registry is re-read
    from git at the start of every operation; the service keeps no snapshot
    between calls.

    Example:
        >>> service = WorktreeService(WorktreesConfig(), prompter, workspace, notifier)
        >>> path = service.create_worktree("feature/login")
        >>> service.switch_worktree(path)
    """

    def __init__(
        self,
        config: WorktreesConfig,
        prompter: Prompter,
        workspace: Workspace,
        notifier: Notifier,
        scheduler: Scheduler | None = None,
        repository: GitRepository | None = None,
    ):
        self.config = config
        self.prompter = prompter
        self.workspace = workspace
        self.notifier = notifier
        self.scheduler = scheduler or DeferredScheduler()
        self.repository = repository or GitRepository()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _notify(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, message)
        self.notifier.notify(message, level)

    def _enter(self, flow: str, state: Enum) -> None:
        logger.debug(f"{flow}: -> {state.value}")

    def _fail(self, flow: str, state: Enum, error: WorktreeError) -> FlowResult:
        level = logging.WARNING if isinstance(error, NothingToDoError) else logging.ERROR
        self._enter(flow, state)
        self._notify(str(error), level)
        return FlowResult(ok=False, message=str(error), state=state.value)

    def _cancel(self, flow: str, state: Enum, message: str) -> FlowResult:
        self._enter(flow, state)
        self._notify(message, logging.INFO)
        return FlowResult(ok=False, message=message, state=state.value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_worktrees(self) -> WorktreeRegistry:
        """Fresh registry snapshot from git."""
        return self.repository.worktrees()

    def list_for_selection(self, registry: WorktreeRegistry | None = None) -> list[SelectionItem]:
        """Selection entries for every worktree, in git's listing order."""
        if registry is None:
            registry = self.list_worktrees()
        return selection_items(list(registry.values()))

    def switch_candidates(self, registry: WorktreeRegistry | None = None) -> list[Worktree]:
        """Worktrees other than the one the session is in."""
        if registry is None:
            registry = self.list_worktrees()
        toplevel = self.repository.toplevel()
        current = normalize_path(toplevel) if toplevel else None
        return [wt for wt in registry.values() if wt.path != current]

    def resolve_new_path(self, branch: str, path: str | None = None) -> str:
        """
        Target directory for a new worktree of ``branch``.

        Raises:
            NoRepositoryError: If the git common dir cannot be found
        """
        base_path = resolve_base_path(self.repository.common_dir(), self.config.base_path)
        return resolve_worktree_path(base_path, path, self.config.path_template, branch)

    # ------------------------------------------------------------------
    # Programmatic operations
    # ------------------------------------------------------------------

    def create_worktree(self, branch: str, path: str | None = None, switch: bool = False) -> str:
        """
        Create a worktree for ``branch``, creating the branch if needed.

        When the repository ends up with exactly one worktree, or ``switch``
        is True, a switch to the new worktree is scheduled. It runs after this
        call has returned.

        Args:
            branch: Branch to check out in the new worktree
            path: Optional target path (absolute, or relative to the base path)
            switch: Schedule a switch to the new worktree

        Returns:
            Normalized path of the new worktree

        Raises:
            InvalidInputError: If ``branch`` is empty
            NoRepositoryError: If not inside a git repository
            CommandFailedError: If ``git worktree add`` fails
        """
        worktree_path, _ = self._create_worktree(branch, path, switch)
        return worktree_path

    def _create_worktree(self, branch: str, path: str | None, switch: bool) -> tuple[str, bool]:
        flow = "create"
        branch = branch.strip() if branch else ""
        if not branch:
            raise InvalidInputError("Branch name is required")

        self._enter(flow, CreateState.RESOLVING)
        worktree_path = self.resolve_new_path(branch, path)

        # Exit status ignored: an existing branch is fine
        self._enter(flow, CreateState.ENSURING_BRANCH)
        self.repository.create_branch(branch)

        self._enter(flow, CreateState.CREATING_WORKTREE)
        self.repository.add_worktree(worktree_path, branch)

        self._enter(flow, CreateState.SUCCESS)
        self._notify(f"Created worktree: {branch} at {worktree_path}")

        scheduled = switch or self._is_only_worktree()
        if scheduled:
            logger.debug(f"Scheduling switch to {worktree_path}")
            self.scheduler.schedule(lambda: self._switch_and_report(worktree_path))

        return worktree_path, scheduled

    def delete_worktree(self, path: str) -> None:
        """
        Force-remove the worktree at ``path``.

        Uncommitted changes in the worktree are discarded.

        Raises:
            InvalidInputError: If ``path`` is empty
            CommandFailedError: If ``git worktree remove`` fails
        """
        if not path or not path.strip():
            raise InvalidInputError("Worktree path is required")

        self._enter("delete", DeleteState.DELETING)
        self.repository.remove_worktree(path)
        self._notify(f"Deleted worktree at: {path}")

    def switch_worktree(self, path: str, registry: WorktreeRegistry | None = None) -> FlowResult:
        """
        Move the session into the worktree at ``path``.

        The file open in the current worktree is reopened in the target if it
        exists there; otherwise the target's default view is opened. Both count
        as success. Navigation history is cleared afterwards.

        Raises:
            NothingToDoError: If the repository reports no worktrees
            InvalidInputError: If ``path`` is empty
            TargetMissingError: If ``path`` is not an existing directory
            NotAWorktreeError: If ``path`` is not a worktree of this repository
        """
        flow = "switch"
        self._enter(flow, SwitchState.VALIDATING)

        if registry is None:
            registry = self.list_worktrees()
        if not registry:
            raise NothingToDoError("No git worktrees found in this repo")
        if not path or not path.strip():
            raise InvalidInputError("Worktree path is required")

        target = normalize_path(path)
        if not os.path.isdir(target):
            raise TargetMissingError(f"Worktree path does not exist: {path}")
        if target not in registry:
            raise NotAWorktreeError(f"Path is not a worktree in the current repository: {path}")

        display_name = registry[target].display_name

        self._enter(flow, SwitchState.RESOLVING_CORRESPONDENCE)
        corresponding = find_corresponding_file(
            self.repository.toplevel(),
            self.workspace.current_file(),
            target,
        )

        self._enter(flow, SwitchState.SWITCHING)
        self.workspace.change_directory(target)

        if corresponding:
            self.workspace.open_file(corresponding)
            message = f"Switched to worktree: {display_name}"
            state = SwitchState.SUCCESS
        else:
            self.workspace.open_default_view()
            message = f"Switched to worktree: {display_name} (file not found)"
            state = SwitchState.SUCCESS_NO_CORRESPONDENCE

        self.workspace.clear_history()
        self._enter(flow, state)
        self._notify(message)
        return FlowResult(ok=True, message=message, state=state.value, path=target, file=corresponding)

    def _is_only_worktree(self) -> bool:
        try:
            return len(self.list_worktrees()) == 1
        except WorktreeError as e:
            logger.warning(f"Could not re-read worktrees after create: {e}")
            return False

    def _switch_and_report(self, path: str) -> FlowResult:
        try:
            return self.switch_worktree(path)
        except WorktreeError as e:
            return self._fail("switch", SwitchState.FAILED, e)

    # ------------------------------------------------------------------
    # Interactive flows
    # ------------------------------------------------------------------

    def create(self, switch: bool = False) -> FlowResult:
        """Prompt for a branch and path, then create the worktree."""
        flow = "create"

        self._enter(flow, CreateState.AWAITING_BRANCH)
        branch = self.prompter.input("Enter branch name for new worktree: ")
        if branch is None or not branch.strip():
            return self._cancel(flow, CreateState.CANCELLED, "Worktree creation cancelled")

        self._enter(flow, CreateState.AWAITING_PATH)
        path = self.prompter.input("Enter path for new worktree (empty for template): ")
        if path is None:
            return self._cancel(flow, CreateState.CANCELLED, "Worktree creation cancelled")

        try:
            created_path, scheduled = self._create_worktree(branch, path, switch)
        except WorktreeError as e:
            return self._fail(flow, CreateState.FAILED, e)

        message = f"Created worktree: {branch.strip()} at {created_path}"
        result = FlowResult(
            ok=True, message=message, state=CreateState.SUCCESS.value, path=created_path
        )

        if not scheduled and self.prompter.confirm("Switch to the new worktree?"):
            self._switch_and_report(created_path)

        return result

    def delete(self) -> FlowResult:
        """Prompt for a worktree and confirmation, then force-remove it."""
        flow = "delete"

        self._enter(flow, DeleteState.AWAITING_SELECTION)
        try:
            registry = self.list_worktrees()
        except WorktreeError as e:
            return self._fail(flow, DeleteState.FAILED, e)

        if not registry:
            return self._fail(flow, DeleteState.NOTHING_TO_DO, NothingToDoError("No worktrees found"))

        items = self.list_for_selection(registry)
        index = self.prompter.select([item.label for item in items], "Select worktree to delete:")
        if index is None:
            return self._cancel(flow, DeleteState.CANCELLED, "Worktree deletion cancelled")

        selected = items[index]

        self._enter(flow, DeleteState.AWAITING_CONFIRMATION)
        if not self.prompter.confirm(f"Confirm deletion of worktree at '{selected.path}':"):
            return self._cancel(flow, DeleteState.CANCELLED, "Worktree deletion cancelled")

        try:
            self.delete_worktree(selected.path)
        except WorktreeError as e:
            return self._fail(flow, DeleteState.FAILED, e)

        self._enter(flow, DeleteState.SUCCESS)
        return FlowResult(
            ok=True,
            message=f"Deleted worktree at: {selected.path}",
            state=DeleteState.SUCCESS.value,
            path=selected.path,
        )

    def switch(self) -> FlowResult:
        """Prompt for another worktree and switch to it."""
        flow = "switch"

        self._enter(flow, SwitchState.AWAITING_SELECTION)
        try:
            registry = self.list_worktrees()
            if not registry:
                raise NothingToDoError("No worktrees found")
            candidates = self.switch_candidates(registry)
            if not candidates:
                raise NothingToDoError("No other worktrees available to switch to")
        except NothingToDoError as e:
            return self._fail(flow, SwitchState.NOTHING_TO_DO, e)
        except WorktreeError as e:
            return self._fail(flow, SwitchState.FAILED, e)

        items = selection_items(candidates)
        index = self.prompter.select([item.label for item in items], "Select worktree to switch to:")
        if index is None:
            return self._cancel(flow, SwitchState.CANCELLED, "Worktree switch cancelled")

        try:
            return self.switch_worktree(items[index].path, registry)
        except WorktreeError as e:
            return self._fail(flow, SwitchState.FAILED, e)
