"""Read-only git queries that turn command output into typed facts."""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from git_workspace_keeper.constants import (
    DETACHED_BRANCH,
    FALLBACK_DEFAULT_BRANCH,
    HEADS_PREFIX,
    UNKNOWN_BRANCH,
)
from git_workspace_keeper.models.workspace import WorkingUnit
from git_workspace_keeper.services.git.runner import GitRunner
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def _strip_heads(ref: str) -> str:
    if ref.startswith(HEADS_PREFIX):
        return ref[len(HEADS_PREFIX):]
    return ref


def parse_worktree_porcelain(output: str) -> List[Dict[str, str]]:
    """Parse ``git worktree list --porcelain`` output.

    Blocks are separated by blank lines. Each block has a ``worktree <path>``
    line followed by ``branch <ref>`` or ``detached`` and optionally ``bare``.
    Blocks marked bare, and blocks without a path, are dropped.

    Returns:
        List of dicts with ``path`` and ``branch`` keys, in output order
    """
    entries = []
    block: List[str] = []
    for raw_line in output.splitlines() + [""]:
        line = raw_line.strip()
        if line:
            block.append(line)
            continue
        # Empty line marks end of worktree entry
        entry = _parse_block(block)
        if entry:
            entries.append(entry)
        block = []
    return entries


def _parse_block(lines: List[str]) -> Optional[Dict[str, str]]:
    path = ""
    branch = UNKNOWN_BRANCH
    is_bare = False
    for line in lines:
        if line.startswith("worktree "):
            path = line[len("worktree "):]
        elif line == "bare":
            is_bare = True
        elif line.startswith("branch "):
            branch = _strip_heads(line[len("branch "):])
        elif line == "detached":
            branch = DETACHED_BRANCH
    if is_bare or not path:
        return None
    return {"path": path, "branch": branch}


class GitProbe:
    """Queries git for repository state.

    Probe methods never raise on tool failure; they fall back to the
    defaults documented on each method. Only cancellation propagates.
    """

    def __init__(self, runner: GitRunner, workers: int = 1):
        """Initialize the probe.

        Args:
            runner: Runner used for every git invocation
            workers: Parallel dirty checks when listing worktrees (1 = sequential)
        """
        self.runner = runner
        self.workers = max(1, workers)

    def is_bare_repository(self, path: str) -> bool:
        """Return True iff git reports ``path`` as a bare repository."""
        result = self.runner.run("rev-parse", "--is-bare-repository", cwd=path)
        return result.ok and result.stdout.strip() == "true"

    def default_branch(self, path: str) -> str:
        """Return the branch HEAD points to in a bare repository.

        Falls back to ``main`` when the symbolic ref can't be read.
        """
        result = self.runner.run("symbolic-ref", "HEAD", cwd=path)
        branch = _strip_heads(result.stdout.strip()) if result.ok else ""
        if not branch:
            logger.debug(f"Could not resolve HEAD in {path}, assuming '{FALLBACK_DEFAULT_BRANCH}'")
            return FALLBACK_DEFAULT_BRANCH
        return branch

    def current_branch(self, path: str) -> str:
        """Return the abbreviated HEAD ref of a working directory, or ``unknown``.

        A detached HEAD (which git abbreviates to ``HEAD``) is reported as
        ``(detached)``.
        """
        result = self.runner.run("rev-parse", "--abbrev-ref", "HEAD", cwd=path)
        branch = result.stdout.strip() if result.ok else ""
        if branch == "HEAD":
            return DETACHED_BRANCH
        return branch or UNKNOWN_BRANCH

    def is_dirty(self, path: str) -> bool:
        """Return True iff ``git status --porcelain`` lists anything.

        A failed status call counts as clean.
        """
        result = self.runner.run("status", "--porcelain", cwd=path)
        if not result.ok:
            logger.debug(f"Status check failed for {path}, treating as clean")
            return False
        return bool(result.stdout.strip())

    def list_worktrees(self, bare_repo_path: str) -> List[WorkingUnit]:
        """List the worktrees linked to a bare repository.

        The bare repository's own entry is excluded. Each worktree's dirty
        flag comes from a status call against the worktree's own path.

        Returns:
            WorkingUnits in the order git listed them, or an empty list if
            the listing fails
        """
        result = self.runner.run("worktree", "list", "--porcelain", cwd=bare_repo_path)
        if not result.ok:
            logger.debug(f"Could not list worktrees for {bare_repo_path}")
            return []

        entries = parse_worktree_porcelain(result.stdout)
        dirty_flags = self._map(self.is_dirty, [entry["path"] for entry in entries])

        worktrees = [
            WorkingUnit(
                name=os.path.basename(entry["path"].rstrip("/\\")),
                path=entry["path"],
                branch=entry["branch"],
                dirty=dirty,
            )
            for entry, dirty in zip(entries, dirty_flags)
        ]
        logger.debug(f"Found {len(worktrees)} worktrees in {bare_repo_path}")
        return worktrees

    def _map(self, func, items: List[str]) -> List:
        """Apply ``func`` to each item, in parallel when configured; order is preserved."""
        if self.workers <= 1 or len(items) <= 1:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=min(self.workers, len(items))) as executor:
            return list(executor.map(func, items))

    def working_unit(self, path: str, name: Optional[str] = None) -> WorkingUnit:
        """Build a WorkingUnit for an ordinary clone."""
        return WorkingUnit(
            name=name or os.path.basename(path.rstrip("/\\")),
            path=path,
            branch=self.current_branch(path),
            dirty=self.is_dirty(path),
        )
