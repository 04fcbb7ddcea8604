"""Workspace and working unit models.

Instances are snapshots produced by a single scan; nothing here is cached
or refreshed in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Convention(Enum):
    """How a workspace organizes its checked-out copies."""
    BARE = "bare"  # bare clone with worktrees inside it
    CONTAINER = "container"  # plain directory holding ordinary clones

    @property
    def children_label(self) -> str:
        return "worktrees" if self is Convention.BARE else "repos"


@dataclass(frozen=True)
class WorkingUnit:
    """One checked-out copy: a worktree or a repo inside a container."""

    name: str
    path: str
    branch: str
    dirty: bool


@dataclass(frozen=True)
class Workspace:
    """A directory under the root recognized as a unit of work."""

    name: str
    path: str
    convention: Convention
    units: Tuple[WorkingUnit, ...] = field(default_factory=tuple)

    @property
    def worktrees(self) -> Tuple[WorkingUnit, ...]:
        return self.units

    @property
    def repos(self) -> Tuple[WorkingUnit, ...]:
        return self.units

    @property
    def is_empty(self) -> bool:
        return not self.units
