"""
Process runner for git commands.

Runs exactly one git process per call and hands back its exit status and
captured output. A non-zero exit status is data, not an error: callers decide
what a failing command means (``git branch <name>`` failing because the
branch already exists is expected, for example).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

# A missing git executable must surface from run() as SpawnFailureError,
# not as GitPython's import-time refresh error.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from git import Git  # noqa: E402
from git.exc import GitCommandNotFound  # noqa: E402

from .errors import SpawnFailureError  # noqa: E402

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of a single git invocation.

    Attributes:
        args: Arguments passed after the executable
        exit_code: Process exit status
        stdout: Captured standard output (trailing newline stripped)
        stderr: Captured standard error
    """

    args: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class GitRunner:
    """
    Synchronous git runner.

    No retries and no timeout: a hung git process blocks the caller until it
    exits.

    Example:
        >>> runner = GitRunner()
        >>> result = runner.run("rev-parse", "--show-toplevel")
        >>> if result.ok:
        ...     print(result.stdout)
    """

    def __init__(self, executable: str = "git", cwd: Path | None = None):
        self.executable = executable
        self.cwd = cwd
        self._git = Git(str(cwd) if cwd is not None else None)

    def run(self, *args: str) -> CommandResult:
        """
        Run ``git <args>`` and capture its result.

        Raises:
            SpawnFailureError: If the process could not be started
        """
        command = [self.executable, *args]
        try:
            status, stdout, stderr = self._git.execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except GitCommandNotFound as e:
            raise SpawnFailureError(f"Could not run {self.executable}: {e}") from e
        except OSError as e:
            raise SpawnFailureError(f"Could not run {self.executable}: {e}") from e

        result = CommandResult(
            args=tuple(args),
            exit_code=int(status),
            stdout=stdout or "",
            stderr=stderr or "",
        )
        logger.debug(f"git {' '.join(args)} -> exit {result.exit_code}")
        return result
