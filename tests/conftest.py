"""Pytest fixtures for git-workspace-keeper tests"""
import tempfile
from pathlib import Path

import git
import pytest

from git_workspace_keeper.constants import ORIGIN_FETCH_REFSPEC
from git_workspace_keeper.services.git.runner import CommandResult


class FakeRunner:
    """Scripted stand-in for GitRunner that records every invocation.

    Responses are looked up by ``(cwd, args)`` first, then by ``args`` alone.
    A response may be a CommandResult or a callable taking ``cwd``.
    """

    def __init__(self, default=None):
        self.responses = {}
        self.calls = []
        self.default = default or CommandResult(1, "", "fatal: unexpected command")

    def add(self, args, result, cwd=None):
        self.responses[(cwd, tuple(args))] = result
        return self

    def ok(self, args, stdout="", cwd=None):
        return self.add(args, CommandResult(0, stdout, ""), cwd)

    def fail(self, args, stderr="fatal: failed", code=128, cwd=None):
        return self.add(args, CommandResult(code, "", stderr), cwd)

    def run(self, *args, cwd=None):
        self.calls.append((tuple(args), cwd))
        response = self.responses.get((cwd, args), self.responses.get((None, args), self.default))
        if callable(response):
            return response(cwd)
        return response

    def commands(self):
        """Return just the argument tuples of the recorded calls."""
        return [args for args, _ in self.calls]


def _configure_user(repo):
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def workspaces_root(temp_dir):
    """Empty directory holding workspaces."""
    root = temp_dir / "workspaces"
    root.mkdir()
    return root


@pytest.fixture
def source_repo(temp_dir):
    """Create a real Git repository to clone from, outside the workspaces root."""
    repo_path = temp_dir / "upstream" / "teamrepo"
    repo_path.mkdir(parents=True)

    repo = git.Repo.init(repo_path)
    _configure_user(repo)

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch("-M", "main")
    except git.exc.GitCommandError:
        pass

    # Second branch so worktrees can check out something other than main
    repo.git.branch("feature")

    yield repo

    repo.close()


@pytest.fixture
def bare_workspace(source_repo, workspaces_root):
    """Bare clone of source_repo at <root>/teamrepo with a clean worktree at teamrepo/main."""
    ws_path = workspaces_root / "teamrepo"
    bare = git.Repo.clone_from(source_repo.working_dir, str(ws_path), bare=True)
    bare.git.config("remote.origin.fetch", ORIGIN_FETCH_REFSPEC)
    bare.git.worktree("add", str(ws_path / "main"), "main")
    bare.close()
    return ws_path


@pytest.fixture
def container_workspace(source_repo, workspaces_root):
    """Container workspace <root>/ws1 holding a clean clone 'api' and a dirty clone 'web'."""
    ws_path = workspaces_root / "ws1"
    ws_path.mkdir()
    for name in ("api", "web"):
        git.Repo.clone_from(source_repo.working_dir, str(ws_path / name)).close()
    (ws_path / "web" / "notes.txt").write_text("untracked\n")
    return ws_path
