"""
wtswitch CLI - worktree commands.

Create, delete, switch and list git worktrees. Without arguments the create,
delete and switch commands prompt interactively.

``switch`` (and ``create --switch``) print the destination on stdout, so a
shell function can follow along::

    wts() { local dest; dest="$(wtswitch switch "$@")" && cd "$dest"; }
"""

from dataclasses import dataclass
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wtswitch.cli.errors import (
    ExitCode,
    console,
    exit_code_for_error,
    exit_code_for_result,
    print_error,
    print_worktree_error,
)
from wtswitch.cli.prompts import ConsoleNotifier, TerminalPrompter, TerminalWorkspace
from wtswitch.core.config import load_config
from wtswitch.core.worktree import (
    DeferredScheduler,
    GitRepository,
    WorktreeError,
    WorktreeService,
    normalize_path,
)

# Tables go to stdout, messages to stderr
stdout_console = Console()


@dataclass
class CliSession:
    """Service plus the terminal collaborators it was built with."""

    service: WorktreeService
    prompter: TerminalPrompter
    workspace: TerminalWorkspace
    scheduler: DeferredScheduler


def _open_session(current_file: str | None = None) -> CliSession:
    """Load config for the current repository and wire up a service."""
    repository = GitRepository()
    try:
        toplevel = repository.toplevel()
    except WorktreeError as e:
        print_worktree_error(e)
        raise typer.Exit(exit_code_for_error(e))

    project_dir = Path(toplevel) if toplevel else Path.cwd()
    try:
        config = load_config(project_dir)
    except ValidationError as e:
        print_error("Invalid configuration", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    prompter = TerminalPrompter(console)
    workspace = TerminalWorkspace(current_file)
    scheduler = DeferredScheduler()
    service = WorktreeService(
        config=config,
        prompter=prompter,
        workspace=workspace,
        notifier=ConsoleNotifier(console),
        scheduler=scheduler,
        repository=repository,
    )
    return CliSession(service, prompter, workspace, scheduler)


def _finish(session: CliSession, print_file: bool = False) -> None:
    """Run deferred work, then print where the session ended up."""
    session.scheduler.run_pending()

    workspace = session.workspace
    if workspace.directory is None:
        return
    if print_file and workspace.opened_file:
        typer.echo(workspace.opened_file)
    else:
        typer.echo(workspace.directory)


def create(
    branch: str | None = typer.Argument(
        None,
        help="Branch for the new worktree (prompts when omitted)",
    ),
    path: str | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Worktree path, absolute or relative to the base path (default: template)",
    ),
    switch: bool = typer.Option(
        False,
        "--switch",
        "-s",
        help="Switch to the new worktree after creating it",
    ),
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        help="File you are editing, reopened in the new worktree on switch",
    ),
    print_file: bool = typer.Option(
        False,
        "--print-file",
        help="On switch, print the corresponding file instead of the directory",
    ),
) -> None:
    """
    Create a new worktree.

    The branch is created from HEAD if it does not exist yet. The worktree
    goes under the configured base path using the path template, unless
    --path is given. If it is the only worktree of the repository, or
    --switch is passed, wtswitch switches to it.

    Examples:
        wtswitch create                       # Prompt for branch and path
        wtswitch create feature/login
        wtswitch create hotfix -p /tmp/hotfix --switch
    """
    session = _open_session(file)

    if branch is None:
        result = session.service.create(switch=switch)
        code = exit_code_for_result(result)
    else:
        try:
            session.service.create_worktree(branch, path, switch=switch)
        except WorktreeError as e:
            print_worktree_error(e)
            raise typer.Exit(exit_code_for_error(e))
        code = ExitCode.SUCCESS

    _finish(session, print_file)
    if code != ExitCode.SUCCESS:
        raise typer.Exit(code)


def delete(
    path: str | None = typer.Argument(
        None,
        help="Path of the worktree to delete (prompts when omitted)",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation",
    ),
) -> None:
    """
    Delete a worktree.

    Removal is forced: uncommitted changes in the worktree are discarded.

    Examples:
        wtswitch delete                      # Pick from a list
        wtswitch delete ../feature-login
        wtswitch delete ../feature-login -y
    """
    session = _open_session()

    if path is None:
        result = session.service.delete()
        code = exit_code_for_result(result)
        if code != ExitCode.SUCCESS:
            raise typer.Exit(code)
        return

    target = normalize_path(path)
    if not yes and not session.prompter.confirm(
        f"Confirm deletion of worktree at '{target}' (uncommitted changes are lost):"
    ):
        console.print("[yellow]Worktree deletion cancelled[/yellow]")
        return

    try:
        session.service.delete_worktree(target)
    except WorktreeError as e:
        print_worktree_error(e)
        raise typer.Exit(exit_code_for_error(e))


def switch(
    path: str | None = typer.Argument(
        None,
        help="Path of the worktree to switch to (prompts when omitted)",
    ),
    file: str | None = typer.Option(
        None,
        "--file",
        "-f",
        help="File you are editing, reopened in the target worktree",
    ),
    print_file: bool = typer.Option(
        False,
        "--print-file",
        help="Print the corresponding file instead of the directory",
    ),
) -> None:
    """
    Switch to another worktree.

    Prints the target directory on stdout. With --file, the same file is
    looked up in the target worktree; --print-file prints it when found.

    Examples:
        wtswitch switch
        wtswitch switch ../feature-login
        wtswitch switch -f src/app.py --print-file
    """
    session = _open_session(file)

    if path is None:
        result = session.service.switch()
        code = exit_code_for_result(result)
    else:
        try:
            session.service.switch_worktree(path)
        except WorktreeError as e:
            print_worktree_error(e)
            raise typer.Exit(exit_code_for_error(e))
        code = ExitCode.SUCCESS

    _finish(session, print_file)
    if code != ExitCode.SUCCESS:
        raise typer.Exit(code)


def list_cmd(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show full branch refs and commit hashes",
    ),
) -> None:
    """
    Show all worktrees in the repository.

    The current worktree is marked with *. Bare entries are not shown.

    Examples:
        wtswitch list
        wtswitch list --verbose
    """
    repository = GitRepository()
    try:
        registry = repository.worktrees()
        toplevel = repository.toplevel()
    except WorktreeError as e:
        print_worktree_error(e)
        raise typer.Exit(exit_code_for_error(e))

    if not registry:
        console.print("[yellow]No worktrees found[/yellow]")
        return

    current = normalize_path(toplevel) if toplevel else None

    table = Table(title="Git Worktrees")
    table.add_column("", style="bold")
    table.add_column("Branch", style="green")
    table.add_column("Path", style="cyan")
    table.add_column("Commit", style="blue")

    for wt in registry.values():
        marker = "*" if wt.path == current else ""
        if verbose:
            branch = wt.branch or "[dim]detached[/dim]"
            commit = wt.commit or "unknown"
        else:
            branch = wt.name or "[dim]detached[/dim]"
            commit = wt.commit[:7] if wt.commit else "unknown"
        table.add_row(marker, branch, escape(wt.path), commit)

    stdout_console.print(table)


__all__ = ["create", "delete", "switch", "list_cmd"]
