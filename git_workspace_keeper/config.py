"""Configuration handling for git-workspace-keeper"""

import os
from dataclasses import dataclass
from typing import Optional

from git_workspace_keeper.constants import DEFAULT_TIMEOUT
from git_workspace_keeper.models.workspace import Convention


@dataclass
class Config:
    """Configuration for git-workspace-keeper with validation."""

    # Directory whose immediate subdirectories are workspaces
    root: str = "."
    convention: str = "bare"  # bare, container

    # Seconds before a single git invocation is killed
    timeout: float = DEFAULT_TIMEOUT

    # Execution modes
    verbose: bool = False
    debug: bool = False
    sequential: bool = False  # Force sequential dirty checks (disable parallelism)
    workers: Optional[int] = None  # Number of parallel workers (None = auto-detect)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_root()
        self._validate_convention()
        self._validate_timeout()
        self._validate_workers()

    def _validate_root(self):
        """Validate root is not empty and make it absolute."""
        if not self.root or not str(self.root).strip():
            raise ValueError("root cannot be empty")
        self.root = os.path.abspath(str(self.root).strip())

    def _validate_convention(self):
        """Validate convention is one of allowed values."""
        allowed = [c.value for c in Convention]
        if self.convention not in allowed:
            raise ValueError(f"convention must be one of {allowed}, got '{self.convention}'")

    def _validate_timeout(self):
        """Validate timeout is positive."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    @property
    def workspace_convention(self) -> Convention:
        return Convention(self.convention)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "root": self.root,
            "convention": self.convention,
            "timeout": self.timeout,
            "verbose": self.verbose,
            "debug": self.debug,
            "sequential": self.sequential,
            "workers": self.workers,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        # Extract only known fields
        known_fields = {
            "root",
            "convention",
            "timeout",
            "verbose",
            "debug",
            "sequential",
            "workers",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
