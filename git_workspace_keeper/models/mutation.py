"""Staged outcome of a mutation.

Mutations run git steps in order with no rollback, so the result records
every stage that was reached and how it ended.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Stage(Enum):
    """Steps a mutation may go through, in execution order."""
    CHECK = "check"  # preconditions on the filesystem
    CLONE = "clone"
    CONFIGURE = "configure"
    WORKTREE = "worktree"


class StageOutcome(Enum):
    OK = "ok"
    FAILED = "failed"
    WARNING = "warning"  # best-effort step failed; the mutation carried on
    SKIPPED = "skipped"


@dataclass
class StageResult:
    stage: Stage
    outcome: StageOutcome
    detail: Optional[str] = None


@dataclass
class MutationResult:
    """Record of which stage reached which outcome."""

    target_path: str
    stages: List[StageResult] = field(default_factory=list)
    message: Optional[str] = None

    def record(self, stage: Stage, outcome: StageOutcome, detail: Optional[str] = None) -> StageResult:
        """Append a stage outcome and return it."""
        stage_result = StageResult(stage, outcome, detail)
        self.stages.append(stage_result)
        return stage_result

    def outcome_of(self, stage: Stage) -> Optional[StageOutcome]:
        """Return the outcome recorded for a stage, or None if it was never reached."""
        for stage_result in self.stages:
            if stage_result.stage is stage:
                return stage_result.outcome
        return None

    @property
    def failed_stage(self) -> Optional[Stage]:
        for stage_result in self.stages:
            if stage_result.outcome is StageOutcome.FAILED:
                return stage_result.stage
        return None

    @property
    def ok(self) -> bool:
        return self.failed_stage is None
