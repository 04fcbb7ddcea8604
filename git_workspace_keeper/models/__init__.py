"""Data models for git-workspace-keeper."""

from .workspace import Convention, Workspace, WorkingUnit
from .mutation import MutationResult, Stage, StageOutcome, StageResult

__all__ = [
    "Convention",
    "Workspace",
    "WorkingUnit",
    "MutationResult",
    "Stage",
    "StageOutcome",
    "StageResult",
]
