"""Tests for the command-line interface"""
from unittest.mock import patch

import pytest

from git_workspace_keeper.cli.args import parse_args
from git_workspace_keeper.cli.main import main


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("git_workspace_keeper.cli.main.setup_logging"):
        yield


class TestParseArgs:
    """Test argument parsing."""

    def test_clone_alias(self):
        args = parse_args(["add", "https://x/y.git"])
        assert args.action == "add"
        assert parse_args(["clone", "https://x/y.git"]).action == "add"

    def test_globals(self):
        args = parse_args(["--root", "/srv", "--convention", "container", "create", "ws1"])
        assert args.root == "/srv"
        assert args.convention == "container"
        assert args.name == "ws1"

    def test_action_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Test the entry point."""

    def test_list(self, bare_workspace, workspaces_root, capsys):
        assert main(["--root", str(workspaces_root), "--sequential", "list"]) == 0
        assert "teamrepo/" in capsys.readouterr().out

    def test_error_exit_code(self, workspaces_root, capsys):
        assert main(["--root", str(workspaces_root), "status", "ghost"]) == 1
        assert "Workspace not found: ghost" in capsys.readouterr().out

    def test_invalid_config(self, workspaces_root, capsys):
        assert main(["--root", str(workspaces_root), "--timeout", "0", "list"]) == 1
        assert "timeout must be positive" in capsys.readouterr().out

    def test_default_root_is_current_directory(self, source_repo, workspaces_root, monkeypatch, capsys):
        monkeypatch.chdir(workspaces_root)
        assert main(["--sequential", "add", source_repo.working_dir]) == 0
        assert (workspaces_root / "teamrepo" / "main").is_dir()
        assert main(["--sequential", "list"]) == 0
        assert "main (main)" in capsys.readouterr().out
