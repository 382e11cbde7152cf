"""
wtswitch CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from wtswitch import __version__
from wtswitch.cli import worktree
from wtswitch.core.config.env import load_layered_env

app = typer.Typer(
    name="wtswitch",
    help="Create, delete and switch between git worktrees",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console(stderr=True)


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, log at DEBUG level (git calls, flow states)
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    wtswitch - hop between git worktrees.

    Worktrees are created under a base path relative to the repository's
    shared git directory (default: its parent), named from a template
    (default: {branch}). Configure them in ~/.config/wtswitch/config.json,
    .wtswitch.json, or WTSWITCH_BASE_PATH / WTSWITCH_PATH_TEMPLATE.

    Examples:
        wtswitch create feature/login     # New worktree for a branch
        wtswitch switch -f src/app.py     # Pick a worktree, keep your file
        wtswitch delete                   # Pick a worktree to remove
        wtswitch list                     # Show all worktrees
    """
    # OS env > project .env > user .env
    load_layered_env()
    setup_logging(debug)


app.command(name="create")(worktree.create)
app.command(name="delete")(worktree.delete)
app.command(name="switch")(worktree.switch)
app.command(name="list")(worktree.list_cmd)


@app.command()
def version() -> None:
    """Show wtswitch version and exit."""
    console.print(f"wtswitch version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
