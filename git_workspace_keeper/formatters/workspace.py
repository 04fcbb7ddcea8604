"""Plain-text rendering of workspaces and their working units."""

from typing import Iterable

from git_workspace_keeper.constants import EMPTY_ANNOTATIONS, INDENT, SYMBOL_DIRTY
from git_workspace_keeper.models.workspace import Workspace, WorkingUnit


def format_working_unit(unit: WorkingUnit) -> str:
    """
    Format one worktree or repo.

    Returns:
        ``name (branch)``, or ``name (branch *)`` when the unit is dirty
    """
    dirty = SYMBOL_DIRTY if unit.dirty else ""
    return f"{unit.name} ({unit.branch}{dirty})"


def format_workspace(workspace: Workspace) -> str:
    """
    Format a workspace header and one indented line per child.

    Example:
        "teamrepo/\\n  main (main)\\n  feature (feature *)"
    """
    if workspace.is_empty:
        annotation = EMPTY_ANNOTATIONS[workspace.convention.value]
        return f"{workspace.name}/ {annotation}"
    lines = [f"{workspace.name}/"]
    lines.extend(f"{INDENT}{format_working_unit(unit)}" for unit in workspace.units)
    return "\n".join(lines)


def format_workspaces(workspaces: Iterable[Workspace]) -> str:
    """Format several workspaces separated by blank lines."""
    return "\n\n".join(format_workspace(ws) for ws in workspaces)
