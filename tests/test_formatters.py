"""Tests for workspace formatting"""
from git_workspace_keeper.formatters import format_working_unit, format_workspace, format_workspaces
from git_workspace_keeper.models.workspace import Convention, Workspace, WorkingUnit


def unit(name, branch="main", dirty=False):
    return WorkingUnit(name=name, path=f"/ws/{name}", branch=branch, dirty=dirty)


class TestFormatWorkingUnit:
    """Test single-line unit formatting."""

    def test_clean(self):
        assert format_working_unit(unit("main")) == "main (main)"

    def test_dirty_marker(self):
        assert format_working_unit(unit("feature", "feature/x", dirty=True)) == "feature (feature/x *)"


class TestFormatWorkspace:
    """Test workspace formatting."""

    def test_empty_bare_workspace(self):
        ws = Workspace("teamrepo", "/ws/teamrepo", Convention.BARE)
        assert format_workspace(ws) == "teamrepo/ (no worktrees)"

    def test_empty_container_workspace(self):
        ws = Workspace("ws1", "/ws/ws1", Convention.CONTAINER)
        assert format_workspace(ws) == "ws1/ (no repos)"

    def test_children_are_indented(self):
        ws = Workspace(
            "teamrepo", "/ws/teamrepo", Convention.BARE,
            (unit("main"), unit("hotfix", "(detached)", dirty=True)),
        )
        assert format_workspace(ws) == "teamrepo/\n  main (main)\n  hotfix ((detached) *)"

    def test_multiple_workspaces_separated_by_blank_line(self):
        first = Workspace("a", "/ws/a", Convention.CONTAINER, (unit("api"),))
        second = Workspace("b", "/ws/b", Convention.CONTAINER)
        assert format_workspaces([first, second]) == "a/\n  api (main)\n\nb/ (no repos)"

    def test_no_workspaces(self):
        assert format_workspaces([]) == ""
