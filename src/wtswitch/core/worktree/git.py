"""
Repository queries used by the worktree service.

Thin wrappers over ``git rev-parse`` and ``git worktree list`` that turn
command output into normalized paths and registry snapshots.
"""

import logging
import os

from .errors import CommandFailedError
from .models import WorktreeRegistry
from .parser import parse_worktree_list
from .paths import normalize_path
from .runner import GitRunner

logger = logging.getLogger(__name__)


class GitRepository:
    """
    Read-only view of the repository the runner operates in.

    Every call spawns a fresh git process; nothing is cached.
    """

    def __init__(self, runner: GitRunner | None = None):
        self.runner = runner or GitRunner()

    def _absolute(self, path: str) -> str:
        # rev-parse may answer relative to the working directory (".git")
        if not os.path.isabs(path) and self.runner.cwd is not None:
            path = os.path.join(str(self.runner.cwd), path)
        return normalize_path(path)

    def _rev_parse(self, flag: str) -> str | None:
        result = self.runner.run("rev-parse", flag)
        output = result.stdout.strip()
        if not result.ok or not output:
            return None
        return self._absolute(output)

    def common_dir(self) -> str | None:
        """Shared git directory, or None outside a repository."""
        return self._rev_parse("--git-common-dir")

    def toplevel(self) -> str | None:
        """Root of the current worktree, or None outside a repository."""
        return self._rev_parse("--show-toplevel")

    def worktrees(self) -> WorktreeRegistry:
        """
        Fetch a fresh snapshot of all non-bare worktrees.

        Raises:
            CommandFailedError: If ``git worktree list`` exits non-zero
        """
        result = self.runner.run("worktree", "list", "--porcelain")
        if not result.ok:
            raise CommandFailedError(
                "Failed to list worktrees", stderr=result.stderr, exit_code=result.exit_code
            )
        registry = parse_worktree_list(result.stdout)
        logger.debug(f"Found {len(registry)} worktree(s)")
        return registry

    def create_branch(self, branch: str) -> bool:
        """
        Create ``branch`` at HEAD if it does not exist yet.

        Best effort: a failure (usually "already exists") is logged and
        reported as False, never raised.
        """
        result = self.runner.run("branch", branch)
        if not result.ok:
            logger.debug(f"git branch {branch} exited {result.exit_code}: {result.stderr.strip()}")
        return result.ok

    def add_worktree(self, path: str, branch: str) -> None:
        """
        Raises:
            CommandFailedError: If ``git worktree add`` exits non-zero
        """
        result = self.runner.run("worktree", "add", path, branch)
        if not result.ok:
            raise CommandFailedError(
                "Failed to create worktree", stderr=result.stderr, exit_code=result.exit_code
            )

    def remove_worktree(self, path: str) -> None:
        """
        Force-remove a worktree, discarding uncommitted changes in it.

        Raises:
            CommandFailedError: If ``git worktree remove`` exits non-zero
        """
        result = self.runner.run("worktree", "remove", path, "--force")
        if not result.ok:
            raise CommandFailedError(
                "Failed to delete worktree", stderr=result.stderr, exit_code=result.exit_code
            )
