"""
Tests for GitRunner and GitRepository.
"""

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from conftest import COMMON_DIR_ARGS, LIST_ARGS, TOPLEVEL_ARGS, FakeRunner, failed, ok, porcelain
from git.exc import GitCommandNotFound

from wtswitch.core.worktree import (
    CommandFailedError,
    CommandResult,
    GitRepository,
    GitRunner,
    SpawnFailureError,
)


@pytest.fixture
def mock_git():
    """Provide a mocked git.Git command wrapper."""
    with patch("wtswitch.core.worktree.runner.Git") as mock_git_class:
        instance = MagicMock()
        mock_git_class.return_value = instance
        yield mock_git_class, instance


class TestGitRunner:
    """Test running git through GitPython."""

    def test_captures_output(self, mock_git):
        _, instance = mock_git
        instance.execute.return_value = (0, "/repo", "")

        result = GitRunner().run("rev-parse", "--show-toplevel")

        instance.execute.assert_called_once_with(
            ["git", "rev-parse", "--show-toplevel"],
            with_extended_output=True,
            with_exceptions=False,
        )
        assert result == CommandResult(
            args=("rev-parse", "--show-toplevel"), exit_code=0, stdout="/repo", stderr=""
        )
        assert result.ok

    def test_non_zero_exit_is_data(self, mock_git):
        _, instance = mock_git
        instance.execute.return_value = (128, "", "fatal: a branch named 'dev' already exists")

        result = GitRunner().run("branch", "dev")

        assert not result.ok
        assert result.exit_code == 128
        assert "already exists" in result.stderr

    def test_missing_executable(self, mock_git):
        _, instance = mock_git
        instance.execute.side_effect = GitCommandNotFound("nogit", "not found")

        with pytest.raises(SpawnFailureError, match="Could not run nogit"):
            GitRunner(executable="nogit").run("status")

    def test_os_error(self, mock_git):
        _, instance = mock_git
        instance.execute.side_effect = PermissionError("denied")

        with pytest.raises(SpawnFailureError):
            GitRunner().run("status")

    def test_working_directory(self, mock_git, tmp_path):
        mock_git_class, _ = mock_git

        runner = GitRunner(cwd=tmp_path)

        mock_git_class.assert_called_once_with(str(tmp_path))
        assert runner.cwd == tmp_path


class TestGitMissingFromPath:
    """Test behaviour when no git executable can be found."""

    def test_run_raises_spawn_failure(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path))

        with pytest.raises(SpawnFailureError, match="Could not run git"):
            GitRunner().run("rev-parse", "--show-toplevel")

    def test_import_succeeds_and_run_reports_spawn_failure(self, tmp_path):
        script = (
            "from wtswitch.core.worktree import GitRunner, SpawnFailureError\n"
            "try:\n"
            "    GitRunner().run('rev-parse', '--show-toplevel')\n"
            "except SpawnFailureError:\n"
            "    print('spawn-failure')\n"
        )
        env = dict(os.environ, PATH=str(tmp_path))
        env.pop("GIT_PYTHON_REFRESH", None)

        result = subprocess.run(
            [sys.executable, "-c", script],
            env=env,
            cwd=tmp_path,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "spawn-failure"


class TestGitRepository:
    """Test repository queries."""

    def test_common_dir_relative_to_runner_cwd(self):
        runner = FakeRunner({COMMON_DIR_ARGS: ok(stdout=".git\n")})
        runner.cwd = Path("/home/me/repo")

        assert GitRepository(runner).common_dir() == "/home/me/repo/.git"

    def test_common_dir_absolute(self):
        runner = FakeRunner({COMMON_DIR_ARGS: ok(stdout="/srv/project.git")})

        assert GitRepository(runner).common_dir() == "/srv/project.git"

    def test_common_dir_outside_repository(self):
        runner = FakeRunner({COMMON_DIR_ARGS: failed(stderr="fatal: not a git repository")})

        assert GitRepository(runner).common_dir() is None

    def test_common_dir_empty_output(self):
        runner = FakeRunner({COMMON_DIR_ARGS: ok(stdout="")})

        assert GitRepository(runner).common_dir() is None

    def test_toplevel(self):
        runner = FakeRunner({TOPLEVEL_ARGS: ok(stdout="/home/me/repo/\n")})

        assert GitRepository(runner).toplevel() == "/home/me/repo"

    def test_worktrees(self):
        output = porcelain({"path": "/repo", "branch": "main"}, {"path": "/wt/dev", "branch": "dev"})
        runner = FakeRunner({LIST_ARGS: ok(stdout=output)})

        registry = GitRepository(runner).worktrees()

        assert set(registry) == {"/repo", "/wt/dev"}
        assert runner.calls == [LIST_ARGS]

    def test_worktrees_failure(self):
        runner = FakeRunner({LIST_ARGS: failed(stderr="fatal: not a git repository\n")})

        with pytest.raises(CommandFailedError, match="Failed to list worktrees: fatal"):
            GitRepository(runner).worktrees()

    def test_create_branch_failure_is_not_raised(self):
        runner = FakeRunner({("branch", "dev"): failed(stderr="fatal: already exists")})

        assert GitRepository(runner).create_branch("dev") is False

    def test_add_worktree_failure_keeps_stderr(self):
        stderr = "fatal: '/wt/dev' already exists\n"
        runner = FakeRunner({("worktree", "add", "/wt/dev", "dev"): failed(stderr=stderr)})

        with pytest.raises(CommandFailedError) as exc_info:
            GitRepository(runner).add_worktree("/wt/dev", "dev")

        assert exc_info.value.stderr == stderr
        assert str(exc_info.value) == "Failed to create worktree: fatal: '/wt/dev' already exists"

    def test_remove_worktree_is_forced(self):
        runner = FakeRunner()

        GitRepository(runner).remove_worktree("/wt/dev")

        assert runner.calls == [("worktree", "remove", "/wt/dev", "--force")]
