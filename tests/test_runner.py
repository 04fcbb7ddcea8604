"""Tests for GitRunner"""
import sys
import threading

import pytest

from git_workspace_keeper.exceptions import OperationCancelledError
from git_workspace_keeper.services.git.runner import CommandResult, GitRunner


class TestCommandBuilding:
    """Test how the command line is assembled."""

    def test_cwd_is_passed_with_dash_c(self):
        runner = GitRunner(executable="git")
        assert runner.build_command(("status", "--porcelain"), cwd="/work/repo") == [
            "git", "-C", "/work/repo", "status", "--porcelain"
        ]

    def test_no_cwd_means_no_dash_c(self):
        runner = GitRunner(executable="git")
        assert runner.build_command(("--version",)) == ["git", "--version"]

    def test_command_result_ok(self):
        assert CommandResult(0, "", "").ok is True
        assert CommandResult(128, "", "fatal").ok is False


class TestGitRunnerExecution:
    """Test running real processes."""

    def test_run_git_version(self):
        result = GitRunner().run("--version")
        assert result.ok
        assert "git version" in result.stdout

    def test_failure_returns_result_instead_of_raising(self, temp_dir):
        result = GitRunner().run("rev-parse", "--verify", "refs/heads/does-not-exist",
                                 cwd=str(temp_dir))
        assert not result.ok
        assert result.stderr.strip()

    def test_runs_against_cwd_without_changing_process_cwd(self, bare_workspace):
        import os
        before = os.getcwd()
        result = GitRunner().run("rev-parse", "--is-bare-repository", cwd=str(bare_workspace))
        assert result.stdout.strip() == "true"
        assert os.getcwd() == before

    def test_missing_executable(self, temp_dir):
        runner = GitRunner(executable=str(temp_dir / "no-such-git"))
        result = runner.run("--version")
        assert result.exit_code == 127
        assert not result.ok

    def test_timeout_kills_process(self):
        runner = GitRunner(timeout=0.3, executable=sys.executable)
        result = runner.run("-c", "import time; time.sleep(10)")
        assert result.timed_out is True
        assert not result.ok
        assert "did not complete" in result.stderr


class TestGitRunnerCancellation:
    """Test the cancellation signal."""

    def test_cancelled_before_launch(self):
        event = threading.Event()
        event.set()
        runner = GitRunner(cancel_event=event)
        with pytest.raises(OperationCancelledError):
            runner.run("--version")

    def test_cancelled_while_running(self):
        event = threading.Event()
        runner = GitRunner(timeout=10, cancel_event=event, executable=sys.executable)
        timer = threading.Timer(0.2, event.set)
        timer.start()
        try:
            with pytest.raises(OperationCancelledError) as exc_info:
                runner.run("-c", "import time; time.sleep(10)")
        finally:
            timer.cancel()
        assert "Cancelled" in str(exc_info.value)
