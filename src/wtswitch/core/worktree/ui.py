"""
Collaborator interfaces for the worktree service.

The service never talks to a terminal or editor directly. Each flow suspends
on a ``Prompter`` call and receives either a value or ``None`` for
"cancelled"; editor-side effects go through ``Workspace``; messages go
through ``Notifier``; the post-create switch is handed to a ``Scheduler``.
"""

import logging
from collections import deque
from collections.abc import Callable, Sequence
from typing import Protocol


class Prompter(Protocol):
    """Interactive input capability."""

    def input(self, prompt: str) -> str | None:
        """Ask for free text. None means cancelled."""
        ...

    def select(self, items: Sequence[str], prompt: str) -> int | None:
        """Pick one of ``items``. Returns its index, or None if cancelled."""
        ...

    def confirm(self, prompt: str) -> bool:
        """Yes/no question. Cancelling counts as no."""
        ...


class Workspace(Protocol):
    """The editing session a switch acts on."""

    def current_file(self) -> str | None:
        """Absolute path of the file being edited, if any."""
        ...

    def change_directory(self, path: str) -> None: ...

    def open_file(self, path: str) -> None: ...

    def open_default_view(self) -> None:
        """Open the start view of the current directory."""
        ...

    def clear_history(self) -> None:
        """Forget navigation history tied to the previous location."""
        ...


class Notifier(Protocol):
    """User-facing notifications; ``level`` is a ``logging`` level."""

    def notify(self, message: str, level: int = logging.INFO) -> None: ...


class Scheduler(Protocol):
    """Runs a callback at the next scheduling opportunity."""

    def schedule(self, callback: Callable[[], object]) -> None: ...


class DeferredScheduler:
    """
    FIFO of callbacks run when the owner calls ``run_pending``.

    Scheduling never runs the callback inline, so the scheduling call returns
    before the deferred work starts.
    """

    def __init__(self) -> None:
        self._pending: deque[Callable[[], object]] = deque()

    def schedule(self, callback: Callable[[], object]) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> list[object]:
        """Run every queued callback, including ones queued while running."""
        results: list[object] = []
        while self._pending:
            callback = self._pending.popleft()
            results.append(callback())
        return results
