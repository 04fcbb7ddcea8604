"""Workspace-creating operations for git-workspace-keeper.

Each operation is an ordered sequence of steps with no rollback. When a
later step fails, whatever the earlier steps created stays on disk and the
raised error names the failing stage.
"""

import os
import re
from contextlib import contextmanager
from typing import Optional

from git_workspace_keeper.constants import ORIGIN_FETCH_REFSPEC
from git_workspace_keeper.exceptions import (
    AlreadyExistsError,
    CloneFailedError,
    InvalidNameError,
    MissingArgumentError,
    OperationCancelledError,
    WorkspaceKeeperError,
    WorkspaceNotFoundError,
    WorktreeFailedError,
)
from git_workspace_keeper.models.mutation import MutationResult, Stage, StageOutcome
from git_workspace_keeper.services.git.probe import GitProbe
from git_workspace_keeper.services.git.runner import CommandResult, GitRunner
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def validate_name(name: str) -> str:
    """Ensure ``name`` is usable as a single directory name under the root.

    Raises:
        InvalidNameError: For empty names, ``.``/``..`` or names containing a path separator
    """
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise InvalidNameError(name)
    return name


def derive_repo_name(url: str, name: Optional[str] = None) -> str:
    """Return ``name``, or the last component of ``url`` without a ``.git`` suffix.

    ``https://host/team/api.git`` and ``git@host:team/api.git`` both give ``api``.
    """
    if name:
        return validate_name(name)
    tail = re.split(r"[/:]", url.rstrip("/"))[-1]
    if tail.endswith(".git") and tail != ".git":
        tail = tail[: -len(".git")]
    return validate_name(tail)


def _error_text(result: CommandResult) -> str:
    return result.stderr.strip() or f"git exited with code {result.exit_code}"


class WorkspaceMutations:
    """Creates workspaces and clones repositories into them."""

    def __init__(self, runner: GitRunner, probe: Optional[GitProbe] = None):
        """Initialize the service.

        Args:
            runner: Runner used for every git invocation
            probe: Probe used to resolve the default branch of new bare clones
        """
        self.runner = runner
        self.probe = probe or GitProbe(runner)

    def create_workspace(self, root: str, name: str) -> MutationResult:
        """Create an empty container workspace directory.

        Raises:
            AlreadyExistsError: If ``root/name`` exists
        """
        name = validate_name(name)
        root = os.path.abspath(root)
        target = os.path.join(root, name)
        result = MutationResult(target)

        if os.path.lexists(target):
            result.record(Stage.CHECK, StageOutcome.FAILED, "target exists")
            raise AlreadyExistsError(name, target, result)
        result.record(Stage.CHECK, StageOutcome.OK)

        try:
            os.makedirs(target)
        except OSError as e:
            result.record(Stage.CHECK, StageOutcome.FAILED, str(e))
            raise WorkspaceKeeperError(f"Could not create {name}/: {e.strerror or e}", result) from e

        logger.info(f"Created workspace directory {target}")
        result.message = f"Created workspace {name}/"
        return result

    def clone_bare_with_worktree(self, root: str, url: str, name: Optional[str] = None) -> MutationResult:
        """Clone ``url`` as a bare workspace and add a worktree for its default branch.

        Steps: bare clone, set origin's fetch refspec (best effort), add
        ``<target>/<default-branch>``.

        Raises:
            MissingArgumentError: If ``url`` is empty
            AlreadyExistsError: If the target path exists
            CloneFailedError: If the bare clone fails; nothing else is attempted
            WorktreeFailedError: If the worktree add fails; the bare clone is kept
        """
        if not url:
            raise MissingArgumentError("url", "add")
        ws_name = derive_repo_name(url, name)
        root = os.path.abspath(root)
        target = os.path.join(root, ws_name)
        result = MutationResult(target)

        if os.path.lexists(target):
            result.record(Stage.CHECK, StageOutcome.FAILED, "target exists")
            raise AlreadyExistsError(ws_name, target, result)
        result.record(Stage.CHECK, StageOutcome.OK)

        with self._stage_guard(result, Stage.CLONE):
            logger.info(f"Cloning {url} (bare) into {target}")
            clone = self.runner.run("clone", "--bare", url, target, cwd=root)
        if not clone.ok:
            stderr = _error_text(clone)
            result.record(Stage.CLONE, StageOutcome.FAILED, stderr)
            logger.error(f"Bare clone of {url} failed: {stderr}")
            result.record(Stage.CONFIGURE, StageOutcome.SKIPPED)
            result.record(Stage.WORKTREE, StageOutcome.SKIPPED)
            raise CloneFailedError(url, stderr, result)
        result.record(Stage.CLONE, StageOutcome.OK)

        with self._stage_guard(result, Stage.CONFIGURE):
            configure = self.runner.run(
                "config", "remote.origin.fetch", ORIGIN_FETCH_REFSPEC, cwd=target
            )
        if configure.ok:
            result.record(Stage.CONFIGURE, StageOutcome.OK)
        else:
            result.record(Stage.CONFIGURE, StageOutcome.WARNING, _error_text(configure))
            logger.warning(f"Could not set fetch refspec in {target}: {_error_text(configure)}")

        with self._stage_guard(result, Stage.WORKTREE):
            branch = self.probe.default_branch(target)
            worktree_path = os.path.join(target, branch)
            worktree = self.runner.run("worktree", "add", worktree_path, branch, cwd=target)
        if not worktree.ok:
            stderr = _error_text(worktree)
            result.record(Stage.WORKTREE, StageOutcome.FAILED, stderr)
            logger.error(f"Worktree add for '{branch}' in {target} failed: {stderr}")
            raise WorktreeFailedError(branch, stderr, result)
        result.record(Stage.WORKTREE, StageOutcome.OK, branch)

        logger.info(f"Created workspace {target} with worktree {branch}")
        result.message = f"Created workspace {ws_name}/ with worktree {branch}/"
        return result

    def clone_into_container(
        self, root: str, workspace_name: str, url: str, name: Optional[str] = None
    ) -> MutationResult:
        """Clone ``url`` normally into an existing container workspace.

        Raises:
            MissingArgumentError: If ``workspace_name`` or ``url`` is empty
            WorkspaceNotFoundError: If ``root/workspace_name`` doesn't exist
            AlreadyExistsError: If the repository path exists
            CloneFailedError: If git fails to clone
        """
        if not workspace_name:
            raise MissingArgumentError("workspace", "add")
        if not url:
            raise MissingArgumentError("url", "add")
        workspace_name = validate_name(workspace_name)
        root = os.path.abspath(root)
        ws_path = os.path.join(root, workspace_name)
        if not os.path.isdir(ws_path):
            result = MutationResult(ws_path)
            result.record(Stage.CHECK, StageOutcome.FAILED, "workspace missing")
            raise WorkspaceNotFoundError(workspace_name, result=result)

        repo_name = derive_repo_name(url, name)
        target = os.path.join(ws_path, repo_name)
        result = MutationResult(target)
        if os.path.lexists(target):
            result.record(Stage.CHECK, StageOutcome.FAILED, "target exists")
            raise AlreadyExistsError(f"{workspace_name}/{repo_name}", target, result)
        result.record(Stage.CHECK, StageOutcome.OK)

        with self._stage_guard(result, Stage.CLONE):
            logger.info(f"Cloning {url} into {target}")
            clone = self.runner.run("clone", url, target, cwd=ws_path)
        if not clone.ok:
            stderr = _error_text(clone)
            result.record(Stage.CLONE, StageOutcome.FAILED, stderr)
            logger.error(f"Clone of {url} failed: {stderr}")
            raise CloneFailedError(url, stderr, result)
        result.record(Stage.CLONE, StageOutcome.OK)

        result.message = f"Cloned {repo_name} into {workspace_name}/"
        return result

    @staticmethod
    @contextmanager
    def _stage_guard(result: MutationResult, stage: Stage):
        """Record a cancelled stage on the result before the error propagates."""
        try:
            yield
        except OperationCancelledError as e:
            result.record(stage, StageOutcome.FAILED, "cancelled")
            e.result = result
            raise
