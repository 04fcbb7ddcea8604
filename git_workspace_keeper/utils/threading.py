"""Threading utilities for sizing the dirty-check worker pool."""

import os
import sys
from typing import Dict, Any, Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with the GIL disabled
    """
    try:
        return hasattr(sys, "_is_gil_enabled") and not sys._is_gil_enabled()
    except Exception:
        return False


def get_optimal_worker_count(user_specified: Optional[int] = None) -> int:
    """Calculate worker count for parallel git status calls.

    Args:
        user_specified: User-specified worker count, if provided

    Returns:
        Number of workers to use
    """
    if user_specified is not None and user_specified > 0:
        return user_specified

    cpu_count = os.cpu_count() or 1

    if is_free_threading_enabled():
        return min(64, cpu_count * 2)

    # Dirty checks are I/O-bound: each one waits on a git subprocess
    return min(32, cpu_count + 4)


def get_threading_info() -> Dict[str, Any]:
    """Get information about the threading configuration (shown with --debug)."""
    return {
        "free_threading": is_free_threading_enabled(),
        "cpu_count": os.cpu_count() or 1,
        "optimal_workers": get_optimal_worker_count(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }
