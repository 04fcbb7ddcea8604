"""Git-related services for git-workspace-keeper."""

from .runner import CommandResult, GitRunner
from .probe import GitProbe, parse_worktree_porcelain

__all__ = [
    "CommandResult",
    "GitRunner",
    "GitProbe",
    "parse_worktree_porcelain",
]
