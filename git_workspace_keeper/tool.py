"""Tool and slash-command adapters exposed to a host application.

The host owns registration; these adapters only translate requests into
scanner and mutation calls and turn every outcome into text.
"""

import os
import threading
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional, Tuple

from git_workspace_keeper.config import Config
from git_workspace_keeper.exceptions import (
    MissingArgumentError,
    NotAWorkspaceError,
    UnsupportedActionError,
    WorkspaceKeeperError,
    WorkspaceNotFoundError,
)
from git_workspace_keeper.formatters import format_workspace, format_workspaces
from git_workspace_keeper.models.workspace import Convention
from git_workspace_keeper.services.git import GitProbe, GitRunner
from git_workspace_keeper.services.mutations import WorkspaceMutations
from git_workspace_keeper.services.scanner import WorkspaceScanner
from git_workspace_keeper.utils.logging import get_logger
from git_workspace_keeper.utils.threading import get_optimal_worker_count

logger = get_logger(__name__)

ACTIONS = ("list", "status", "add", "clone", "create")


@dataclass
class ToolResponse:
    """Plain-text result handed back to the host."""

    text: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


@dataclass
class WorkspaceRequest:
    """Parameters accepted by the workspace tool."""

    action: str
    name: Optional[str] = None  # workspace name (status/create) or custom clone name (add)
    url: Optional[str] = None
    workspace: Optional[str] = None  # container workspace to clone into

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "WorkspaceRequest":
        """Build a request from a loosely-typed parameter dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in params.items():
            if key not in known or value is None:
                continue
            value = str(value).strip()
            if value:
                values[key] = value
        if "action" not in values:
            raise MissingArgumentError("action")
        return cls(**values)

    def validate(self, convention: Convention) -> None:
        """Check the fields required by this request's action.

        Raises:
            UnsupportedActionError: For unknown actions, or ``create`` on bare workspaces
            MissingArgumentError: When a required field is absent
        """
        if self.action not in ACTIONS:
            raise UnsupportedActionError(self.action)
        if self.action == "create" and convention is not Convention.CONTAINER:
            raise UnsupportedActionError(self.action, convention.value)

        required: Tuple[str, ...] = ()
        if self.action in ("add", "clone"):
            required = ("workspace", "url") if convention is Convention.CONTAINER else ("url",)
        elif self.action in ("status", "create"):
            required = ("name",)

        for field_name in required:
            if not getattr(self, field_name):
                raise MissingArgumentError(field_name, self.action)


class WorkspaceTool:
    """The ``workspace`` tool: list, inspect and populate workspaces under a root."""

    name = "workspace"
    label = "Workspace"

    def __init__(self, config: Config, runner: Optional[GitRunner] = None):
        """Initialize the tool.

        Args:
            config: Root directory, convention and execution settings
            runner: Runner to use for every call; by default a new one is
                created per call so it can carry that call's cancel event
        """
        self.config = config
        self.convention = config.workspace_convention
        self.runner = runner

    @property
    def description(self) -> str:
        if self.convention is Convention.BARE:
            lines = [
                "Manage workspaces (bare git repos) and their worktrees.",
                "Actions:",
                "  list - list all workspaces and their worktrees",
                "  add <url> [name] - clone a repo as a bare workspace with a main worktree",
                "  status <name> - show worktree status in a workspace",
            ]
        else:
            lines = [
                "Manage workspaces (directories of git clones) and their repos.",
                "Actions:",
                "  list - list all workspaces and their repos",
                "  create <name> - create an empty workspace",
                "  add <workspace> <url> [name] - clone a repo into a workspace",
                "  status <name> - show repo status in a workspace",
            ]
        return "\n".join(lines)

    @property
    def parameters(self) -> Dict[str, Any]:
        """JSON schema of the accepted parameters."""
        actions = ["list", "add", "status"]
        if self.convention is Convention.CONTAINER:
            actions.append("create")
        return {
            "type": "object",
            "properties": {
                "action": {"type": "string", "enum": actions},
                "name": {
                    "type": "string",
                    "description": "Workspace name (for status/create) or custom name (for add)",
                },
                "url": {"type": "string", "description": "Git repo URL (for add)"},
                "workspace": {
                    "type": "string",
                    "description": "Workspace to clone into (for add, container workspaces)",
                },
            },
            "required": ["action"],
        }

    def execute(self, params: Dict[str, Any],
                cancel_event: Optional[threading.Event] = None) -> ToolResponse:
        """Run one tool call. Errors come back as error responses, never as exceptions."""
        try:
            request = WorkspaceRequest.from_params(params)
            return ToolResponse(self.handle(request, cancel_event))
        except WorkspaceKeeperError as e:
            logger.info(f"workspace {params.get('action')} failed: {e}")
            return error_response(e)

    def handle(self, request: WorkspaceRequest,
               cancel_event: Optional[threading.Event] = None) -> str:
        """Run a validated request and return its success text.

        Raises:
            WorkspaceKeeperError: Any failure, tagged by type
        """
        request.validate(self.convention)
        root = self.config.root
        runner = self.runner or GitRunner(timeout=self.config.timeout, cancel_event=cancel_event)
        probe = GitProbe(runner, workers=self._workers())
        scanner = WorkspaceScanner(probe, self.convention)

        if request.action == "list":
            workspaces = scanner.scan_root(root)
            if not workspaces:
                hint = "add" if self.convention is Convention.BARE else "create"
                return f"No workspaces found. Add one with action: {hint}"
            return format_workspaces(workspaces)

        if request.action == "status":
            ws_path = os.path.join(root, request.name)
            if not os.path.isdir(ws_path):
                raise WorkspaceNotFoundError(request.name)
            if self.convention is Convention.BARE and not scanner.is_workspace(ws_path):
                raise NotAWorkspaceError(request.name, self.convention.value)
            return format_workspace(scanner.scan_workspace(ws_path))

        mutations = WorkspaceMutations(runner, probe)
        if request.action == "create":
            result = mutations.create_workspace(root, request.name)
        elif self.convention is Convention.BARE:
            result = mutations.clone_bare_with_worktree(root, request.url, request.name)
        else:
            result = mutations.clone_into_container(
                root, request.workspace, request.url, request.name
            )
        return result.message

    def _workers(self) -> int:
        # Debug mode keeps git calls sequential so logs stay readable
        if self.config.sequential or self.config.debug:
            return 1
        return get_optimal_worker_count(self.config.workers)


def error_response(error: WorkspaceKeeperError) -> ToolResponse:
    """Turn a tagged error into an error response."""
    if isinstance(error, MissingArgumentError):
        return ToolResponse(f"Error: {error}", is_error=True)
    return ToolResponse(str(error), is_error=True)


class WorkspaceCommands:
    """Slash-command handlers taking a single whitespace-separated argument string."""

    def __init__(self, tool: WorkspaceTool):
        self.tool = tool

    @property
    def _container(self) -> bool:
        return self.tool.convention is Convention.CONTAINER

    def on_list(self, args: str = "") -> ToolResponse:
        return self.tool.execute({"action": "list"})

    def on_add(self, args: str = "") -> ToolResponse:
        parts = (args or "").split()
        if self._container:
            if len(parts) < 2:
                return ToolResponse("Usage: /workspace:add <workspace> <url> [name]", is_error=True)
            params = {"action": "add", "workspace": parts[0], "url": parts[1]}
            rest = parts[2:]
        else:
            if not parts:
                return ToolResponse("Usage: /workspace:add <url> [name]", is_error=True)
            params = {"action": "add", "url": parts[0]}
            rest = parts[1:]
        if rest:
            params["name"] = rest[0]
        return self.tool.execute(params)

    def on_status(self, args: str = "") -> ToolResponse:
        name = (args or "").strip()
        if not name:
            return ToolResponse("Usage: /workspace:status <name>", is_error=True)
        return self.tool.execute({"action": "status", "name": name})

    def on_create(self, args: str = "") -> ToolResponse:
        name = (args or "").strip()
        if not name:
            return ToolResponse("Usage: /workspace:create <name>", is_error=True)
        return self.tool.execute({"action": "create", "name": name})

    def definitions(self) -> List[Tuple[str, str, Callable[[str], ToolResponse]]]:
        """Return ``(name, description, handler)`` for each command."""
        units = "repos" if self._container else "worktrees"
        commands = [
            ("workspace:list", f"List workspaces and their {units}", self.on_list),
        ]
        if self._container:
            commands.append(
                ("workspace:create", "Create an empty workspace: /workspace:create <name>", self.on_create)
            )
            commands.append(
                ("workspace:add",
                 "Clone a repo into a workspace: /workspace:add <workspace> <url> [name]",
                 self.on_add)
            )
        else:
            commands.append(
                ("workspace:add", "Clone a repo as a workspace: /workspace:add <url> [name]", self.on_add)
            )
        commands.append(
            ("workspace:status", "Show workspace status: /workspace:status <name>", self.on_status)
        )
        return commands


def register(host, config: Config) -> WorkspaceTool:
    """Register the tool and slash commands with a host.

    ``host`` must provide ``register_tool(tool)`` and
    ``register_command(name, description, handler)``.
    """
    tool = WorkspaceTool(config)
    host.register_tool(tool)
    for name, description, handler in WorkspaceCommands(tool).definitions():
        host.register_command(name, description, handler)
    return tool
