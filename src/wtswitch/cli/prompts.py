"""
Terminal implementations of the worktree service collaborators.

Prompts and notifications are written to stderr so stdout stays free for the
path a shell wrapper should ``cd`` into.
"""

import logging
import os
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

NOTIFY_STYLES = {
    logging.ERROR: "red",
    logging.WARNING: "yellow",
    logging.INFO: "green",
}


def _question(prompt: str) -> str:
    # rich appends its own ": "
    return escape(prompt.rstrip().rstrip(":"))


class TerminalPrompter:
    """Prompter backed by rich prompts. Ctrl+C or EOF cancels."""

    def __init__(self, console: Console):
        self.console = console

    def input(self, prompt: str) -> str | None:
        try:
            return Prompt.ask(
                _question(prompt),
                console=self.console,
                default="",
                show_default=False,
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None

    def select(self, items: Sequence[str], prompt: str) -> int | None:
        self.console.print(f"[bold]{_question(prompt)}[/bold]")
        for i, item in enumerate(items, start=1):
            self.console.print(f"  [cyan]{i}.[/cyan] {escape(item)}")

        choices = [str(i) for i in range(1, len(items) + 1)]
        try:
            answer = Prompt.ask(
                "Choice (empty to cancel)",
                console=self.console,
                choices=choices,
                default="",
                show_choices=False,
                show_default=False,
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None

        if not answer:
            return None
        return int(answer) - 1

    def confirm(self, prompt: str) -> bool:
        try:
            return Confirm.ask(_question(prompt), console=self.console, default=False)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return False


class ConsoleNotifier:
    """Prints notifications in a color matching their level."""

    def __init__(self, console: Console):
        self.console = console

    def notify(self, message: str, level: int = logging.INFO) -> None:
        style = NOTIFY_STYLES.get(level, "dim")
        self.console.print(f"[{style}]{escape(message)}[/{style}]", highlight=False)


class TerminalWorkspace:
    """
    Workspace for a shell session.

    A child process cannot change its parent shell's directory, so the
    workspace changes this process's directory (later git calls then run in
    the new worktree) and records where it ended up for the CLI to print.

    Attributes:
        directory: Directory switched to, if any
        opened_file: File opened after the last switch, if any
        history: Locations left behind since the last history clear
    """

    def __init__(self, current_file: str | None = None):
        self._current_file = os.path.abspath(current_file) if current_file else None
        self.directory: str | None = None
        self.opened_file: str | None = None
        self.history: list[str] = []

    def current_file(self) -> str | None:
        return self._current_file

    def change_directory(self, path: str) -> None:
        self.history.append(os.getcwd())
        os.chdir(path)
        self.directory = path

    def open_file(self, path: str) -> None:
        if self._current_file:
            self.history.append(self._current_file)
        self._current_file = path
        self.opened_file = path

    def open_default_view(self) -> None:
        if self._current_file:
            self.history.append(self._current_file)
        self._current_file = None
        self.opened_file = None

    def clear_history(self) -> None:
        self.history.clear()
