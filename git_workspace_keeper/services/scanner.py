"""Workspace discovery for git-workspace-keeper."""

import os
from typing import List, Optional, Tuple

from git_workspace_keeper.constants import GIT_MARKER, HIDDEN_PREFIX
from git_workspace_keeper.exceptions import RootNotReadableError
from git_workspace_keeper.models.workspace import Convention, Workspace, WorkingUnit
from git_workspace_keeper.services.git.probe import GitProbe
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def list_subdirectories(path: str) -> List[Tuple[str, str]]:
    """Return ``(name, path)`` for each visible immediate subdirectory, sorted by name.

    Raises:
        OSError: If ``path`` can't be listed
    """
    found = []
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.name.startswith(HIDDEN_PREFIX):
                continue
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                continue
            found.append((entry.name, entry.path))
    return sorted(found)


class ChildEnumerator:
    """Finds the working units of one workspace convention."""

    convention: Convention

    def __init__(self, probe: GitProbe):
        self.probe = probe

    def is_workspace(self, path: str) -> bool:
        raise NotImplementedError

    def enumerate(self, path: str) -> List[WorkingUnit]:
        raise NotImplementedError


class BareRepoEnumerator(ChildEnumerator):
    """Workspaces are bare repositories; children are their worktrees."""

    convention = Convention.BARE

    def is_workspace(self, path: str) -> bool:
        return self.probe.is_bare_repository(path)

    def enumerate(self, path: str) -> List[WorkingUnit]:
        return self.probe.list_worktrees(path)


class ContainerEnumerator(ChildEnumerator):
    """Workspaces are plain directories; children are the git checkouts inside them."""

    convention = Convention.CONTAINER

    @staticmethod
    def repo_dirs(path: str) -> List[Tuple[str, str]]:
        try:
            subdirs = list_subdirectories(path)
        except OSError as e:
            logger.debug(f"Could not list {path}: {e}")
            return []
        return [
            (name, child) for name, child in subdirs
            if os.path.lexists(os.path.join(child, GIT_MARKER))
        ]

    def is_workspace(self, path: str) -> bool:
        return bool(self.repo_dirs(path))

    def enumerate(self, path: str) -> List[WorkingUnit]:
        return [self.probe.working_unit(child, name) for name, child in self.repo_dirs(path)]


ENUMERATORS = {
    Convention.BARE: BareRepoEnumerator,
    Convention.CONTAINER: ContainerEnumerator,
}


class WorkspaceScanner:
    """Classifies the directories under a root and snapshots their working units.

    Every call re-reads the filesystem and git; nothing is cached.
    """

    def __init__(self, probe: GitProbe, convention: Convention = Convention.BARE):
        self.probe = probe
        self.convention = convention
        self.enumerator: ChildEnumerator = ENUMERATORS[convention](probe)

    def scan_root(self, root_path: str) -> List[Workspace]:
        """Return every workspace directly under ``root_path``, in name order.

        Hidden entries and non-directories are skipped. Probe failures on one
        candidate never stop the others from being scanned.

        Raises:
            RootNotReadableError: If ``root_path`` itself can't be listed
        """
        try:
            candidates = list_subdirectories(root_path)
        except OSError as e:
            raise RootNotReadableError(root_path, e.strerror or str(e)) from e

        workspaces = []
        for name, path in candidates:
            if self.convention is Convention.CONTAINER:
                # Only non-empty containers count, so enumerate once and reuse it
                units = self.enumerator.enumerate(path)
                if units:
                    workspaces.append(self._build(path, units, name))
                continue
            if self.enumerator.is_workspace(path):
                workspaces.append(self.scan_workspace(path))

        logger.info(f"Found {len(workspaces)} {self.convention.value} workspaces in {root_path}")
        return workspaces

    def scan_workspace(self, path: str) -> Workspace:
        """Snapshot a single workspace.

        A path that doesn't exist yields a workspace with no children.
        """
        if not os.path.isdir(path):
            logger.debug(f"Workspace path {path} doesn't exist")
            return self._build(path, [])
        return self._build(path, self.enumerator.enumerate(path))

    def is_workspace(self, path: str) -> bool:
        return os.path.isdir(path) and self.enumerator.is_workspace(path)

    def _build(self, path: str, units: List[WorkingUnit], name: Optional[str] = None) -> Workspace:
        return Workspace(
            name=name or os.path.basename(os.path.normpath(path)),
            path=path,
            convention=self.convention,
            units=tuple(units),
        )

