"""
Worktree error taxonomy.

Every error here is terminal for the operation that raised it; none of them
are retried automatically.
"""


class WorktreeError(Exception):
    """Base exception for worktree operations."""

    pass


class NoRepositoryError(WorktreeError):
    """Raised when no common or toplevel directory can be resolved."""

    def __init__(self, message: str = "Not in a git repository"):
        super().__init__(message)


class InvalidInputError(WorktreeError):
    """Raised for empty branch names or empty required paths."""

    pass


class SpawnFailureError(WorktreeError):
    """Raised when the git executable could not be started at all."""

    pass


class CommandFailedError(WorktreeError):
    """
    Raised when git ran but exited non-zero.

    Attributes:
        stderr: Captured standard error, verbatim
        exit_code: Process exit status
    """

    def __init__(self, message: str, stderr: str = "", exit_code: int = 1):
        detail = stderr.strip()
        super().__init__(f"{message}: {detail}" if detail else message)
        self.stderr = stderr
        self.exit_code = exit_code


class TargetMissingError(WorktreeError):
    """Raised when a switch target does not exist or is not a directory."""

    pass


class NotAWorktreeError(WorktreeError):
    """Raised when a switch target exists but is not a worktree of this repository."""

    pass


class NothingToDoError(WorktreeError):
    """Raised when there is nothing to select from. A warning, not a hard error."""

    pass
