"""
Standardized error handling and exit codes for the wtswitch CLI.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from wtswitch.core.worktree import (
    FlowResult,
    InvalidInputError,
    NoRepositoryError,
    WorktreeError,
)

console = Console(stderr=True)

# Flow end states that are not failures
QUIET_STATES = {"success", "success_no_correspondence", "cancelled", "nothing_to_do"}


class ExitCode(IntEnum):
    """Standard exit codes for wtswitch operations."""

    SUCCESS = 0
    """Operation completed, was cancelled, or had nothing to do."""

    GENERAL_ERROR = 1
    """Git failed or the target was unusable."""

    USER_ERROR = 2
    """Bad input or not inside a git repository (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Not in a git repository",
        ...     solution="cd into a checkout and retry",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def exit_code_for_error(error: WorktreeError) -> ExitCode:
    """Map a worktree error to a process exit code."""
    if isinstance(error, (InvalidInputError, NoRepositoryError)):
        return ExitCode.USER_ERROR
    return ExitCode.GENERAL_ERROR


def exit_code_for_result(result: FlowResult) -> ExitCode:
    """Map the end state of an interactive flow to a process exit code."""
    if result.ok or result.state in QUIET_STATES:
        return ExitCode.SUCCESS
    return ExitCode.GENERAL_ERROR


def print_worktree_error(error: WorktreeError) -> None:
    """Print a worktree error with a hint where one helps."""
    if isinstance(error, NoRepositoryError):
        print_error(str(error), solution="cd into a git checkout and run the command again")
    else:
        print_error(str(error))
