"""Custom exceptions for git-workspace-keeper"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from git_workspace_keeper.models.mutation import MutationResult


class WorkspaceKeeperError(Exception):
    """Base exception for all git-workspace-keeper errors."""

    def __init__(self, message: str, result: Optional["MutationResult"] = None):
        self.message = message
        # Partial outcome of the mutation that raised, if any
        self.result = result
        super().__init__(message)


class AlreadyExistsError(WorkspaceKeeperError):
    """Raised when the target workspace or repository path is already taken."""

    def __init__(self, name: str, path: str, result: Optional["MutationResult"] = None):
        self.name = name
        self.path = path
        super().__init__(f"Already exists: {name}/", result)


class WorkspaceNotFoundError(WorkspaceKeeperError):
    """Raised when a referenced workspace does not exist."""

    def __init__(self, name: str, message: Optional[str] = None,
                 result: Optional["MutationResult"] = None):
        self.name = name
        super().__init__(message or f"Workspace not found: {name}", result)


class NotAWorkspaceError(WorkspaceNotFoundError):
    """Raised when a directory exists but isn't a workspace of the active convention."""

    def __init__(self, name: str, convention: str):
        self.convention = convention
        kind = "bare repo" if convention == "bare" else "repo container"
        super().__init__(name, f"Not a workspace ({kind}): {name}")


class CloneFailedError(WorkspaceKeeperError):
    """Raised when git reports a failure while cloning."""

    def __init__(self, url: str, stderr: str, result: Optional["MutationResult"] = None):
        self.url = url
        self.stderr = stderr
        super().__init__(f"Clone failed: {stderr}", result)


class WorktreeFailedError(WorkspaceKeeperError):
    """Raised when the clone succeeded but adding the default worktree did not.

    The bare repository is left on disk.
    """

    def __init__(self, branch: str, stderr: str, result: Optional["MutationResult"] = None):
        self.branch = branch
        self.stderr = stderr
        super().__init__(f"Clone succeeded but worktree failed: {stderr}", result)


class MissingArgumentError(WorkspaceKeeperError):
    """Raised when a required request parameter is absent."""

    def __init__(self, argument: str, action: Optional[str] = None):
        self.argument = argument
        self.action = action
        super().__init__(f"{argument} required")


class InvalidNameError(WorkspaceKeeperError):
    """Raised when a workspace or repository name can't be used as a directory name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid name: {name!r}")


class UnsupportedActionError(WorkspaceKeeperError):
    """Raised for unknown actions or actions the active convention doesn't offer."""

    def __init__(self, action: str, convention: Optional[str] = None):
        self.action = action
        self.convention = convention
        if convention:
            message = f"Action '{action}' is not available for {convention} workspaces"
        else:
            message = f"Unknown action: {action}"
        super().__init__(message)


class OperationCancelledError(WorkspaceKeeperError):
    """Raised when the caller's cancellation signal aborts a git invocation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cancelled: {operation}")


class RootNotReadableError(WorkspaceKeeperError):
    """Raised when the workspaces root directory can't be listed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read workspaces root '{path}': {reason}")
