"""
git-workspace-keeper - Discover, inspect and create git workspaces
"""

from .__version__ import __version__
from .config import Config
from .tool import WorkspaceTool, register
from .cli.main import main

__all__ = ["Config", "WorkspaceTool", "register", "main", "__version__"]
