"""Formatting utilities for git-workspace-keeper."""

from .workspace import format_working_unit, format_workspace, format_workspaces

__all__ = [
    "format_working_unit",
    "format_workspace",
    "format_workspaces",
]
