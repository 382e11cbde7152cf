"""
Pytest configuration and shared fixtures.

Provides a scripted git runner, recording collaborators for the worktree
service, and porcelain listing helpers used across the test suite.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from wtswitch.core.config.models import WorktreesConfig
from wtswitch.core.worktree import (
    CommandResult,
    DeferredScheduler,
    GitRepository,
    WorktreeService,
)

# ==============================================================================
# Git Runner Fakes
# ==============================================================================


def ok(*args: str, stdout: str = "") -> CommandResult:
    """Successful command result."""
    return CommandResult(args=tuple(args), exit_code=0, stdout=stdout)


def failed(*args: str, stderr: str = "fatal: failed", exit_code: int = 128) -> CommandResult:
    """Failed command result."""
    return CommandResult(args=tuple(args), exit_code=exit_code, stderr=stderr)


def porcelain(*blocks: dict[str, str | None]) -> str:
    """
    Build ``git worktree list --porcelain`` output.

    Each block is a dict with ``path`` and optional ``branch``, ``head``
    and ``bare`` keys.
    """
    chunks = []
    for block in blocks:
        lines = [f"worktree {block['path']}"]
        if block.get("bare"):
            lines.append("bare")
        else:
            lines.append(f"HEAD {block.get('head') or 'a' * 40}")
            if block.get("branch"):
                lines.append(f"branch refs/heads/{block['branch']}")
            else:
                lines.append("detached")
        chunks.append("\n".join(lines))
    return "\n\n".join(chunks) + "\n"


class FakeRunner:
    """
    Scripted stand-in for GitRunner.

    ``responses`` maps an argument tuple to a CommandResult, or to a list of
    results consumed in order (the last one repeats). Unknown commands
    succeed with empty output. Every call is recorded in ``calls``.
    """

    def __init__(self, responses: dict[tuple[str, ...], object] | None = None):
        self.cwd: Path | None = None
        self.calls: list[tuple[str, ...]] = []
        self.responses: dict[tuple[str, ...], object] = dict(responses or {})
        self.hooks: dict[tuple[str, ...], Callable[[], None]] = {}

    def run(self, *args: str) -> CommandResult:
        self.calls.append(args)
        if hook := self.hooks.get(args):
            hook()
        response = self.responses.get(args)
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if response is None:
            return ok(*args)
        assert isinstance(response, CommandResult)
        return response

    def count(self, *prefix: str) -> int:
        """Number of recorded calls starting with ``prefix``."""
        return sum(1 for call in self.calls if call[: len(prefix)] == prefix)


LIST_ARGS = ("worktree", "list", "--porcelain")
TOPLEVEL_ARGS = ("rev-parse", "--show-toplevel")
COMMON_DIR_ARGS = ("rev-parse", "--git-common-dir")


# ==============================================================================
# Collaborator Fakes
# ==============================================================================


class ScriptedPrompter:
    """Prompter answering from queues; an exhausted queue means cancel."""

    def __init__(
        self,
        inputs: Sequence[str | None] = (),
        selections: Sequence[int | None] = (),
        confirmations: Sequence[bool] = (),
    ):
        self.inputs = list(inputs)
        self.selections = list(selections)
        self.confirmations = list(confirmations)
        self.prompts: list[str] = []
        self.offered: list[list[str]] = []

    def input(self, prompt: str) -> str | None:
        self.prompts.append(prompt)
        return self.inputs.pop(0) if self.inputs else None

    def select(self, items: Sequence[str], prompt: str) -> int | None:
        self.prompts.append(prompt)
        self.offered.append(list(items))
        return self.selections.pop(0) if self.selections else None

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.confirmations.pop(0) if self.confirmations else False


class RecordingWorkspace:
    """Workspace that records the editor actions it is asked to perform."""

    def __init__(self, current_file: str | None = None):
        self.file = current_file
        self.actions: list[tuple[str, str | None]] = []

    def current_file(self) -> str | None:
        return self.file

    def change_directory(self, path: str) -> None:
        self.actions.append(("cd", path))

    def open_file(self, path: str) -> None:
        self.actions.append(("open", path))

    def open_default_view(self) -> None:
        self.actions.append(("default_view", None))

    def clear_history(self) -> None:
        self.actions.append(("clear_history", None))


class RecordingNotifier:
    """Notifier that keeps (level, message) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[int, str]] = []

    def notify(self, message: str, level: int = logging.INFO) -> None:
        self.messages.append((level, message))

    def at(self, level: int) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def runner():
    """Provide a scripted git runner."""
    return FakeRunner()


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def workspace():
    return RecordingWorkspace()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def scheduler():
    return DeferredScheduler()


@pytest.fixture
def config():
    """Default configuration."""
    return WorktreesConfig()


@pytest.fixture
def make_service(runner, prompter, workspace, notifier, scheduler, config):
    """Factory for a WorktreeService wired to the fakes above."""

    def _make(**overrides) -> WorktreeService:
        kwargs = {
            "config": config,
            "prompter": prompter,
            "workspace": workspace,
            "notifier": notifier,
            "scheduler": scheduler,
            "repository": GitRepository(runner),
        }
        kwargs.update(overrides)
        return WorktreeService(**kwargs)

    return _make


@pytest.fixture
def repo_layout(tmp_path):
    """
    Provide a repository layout on disk.

    Creates:
    - repo/            main worktree with src/app.py
    - repo/.git/       common dir
    - dev/             second worktree with src/app.py
    - docs-only/       third worktree without src/app.py
    """
    main = tmp_path / "repo"
    (main / ".git").mkdir(parents=True)
    (main / "src").mkdir()
    (main / "src" / "app.py").write_text("print('main')\n")

    dev = tmp_path / "dev"
    (dev / "src").mkdir(parents=True)
    (dev / "src" / "app.py").write_text("print('dev')\n")

    docs = tmp_path / "docs-only"
    docs.mkdir()

    return {"root": tmp_path, "main": main, "dev": dev, "docs": docs}
