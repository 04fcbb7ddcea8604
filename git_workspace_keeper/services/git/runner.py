"""Git process runner for git-workspace-keeper."""

import subprocess
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

import git

from git_workspace_keeper.constants import DEFAULT_TIMEOUT
from git_workspace_keeper.exceptions import OperationCancelledError
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)

# Seconds between checks of the cancellation signal while a child runs
POLL_INTERVAL = 0.05


@dataclass
class CommandResult:
    """Exit code and captured output of one git invocation."""

    exit_code: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def _decode(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class GitRunner:
    """Runs git commands through GitPython with a timeout and optional cancellation.

    The target directory is always passed as ``git -C <path>`` so the
    process working directory is never changed.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        cancel_event: Optional[threading.Event] = None,
        executable: Optional[str] = None,
    ):
        """Initialize the runner.

        Args:
            timeout: Seconds before a running command is killed
            cancel_event: Event that aborts the in-flight command when set
            executable: Program to run instead of the git found by GitPython
        """
        self.timeout = timeout
        self.cancel_event = cancel_event
        self.executable = executable or git.Git.GIT_PYTHON_GIT_EXECUTABLE or "git"
        self._git = git.Git()

    def build_command(self, args, cwd: Optional[str] = None) -> List[str]:
        command = [self.executable]
        if cwd is not None:
            command.extend(["-C", str(cwd)])
        command.extend(str(arg) for arg in args)
        return command

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def run(self, *args: str, cwd: Optional[str] = None) -> CommandResult:
        """Run a git command and capture its result.

        Args:
            *args: git arguments, e.g. ``"status", "--porcelain"``
            cwd: Directory the command should operate on

        Returns:
            CommandResult. Timeouts and a missing executable produce a
            non-zero result rather than an exception.

        Raises:
            OperationCancelledError: If the cancellation event is set
        """
        command = self.build_command(args, cwd)
        operation = " ".join(command[1:])

        if self._cancelled():
            raise OperationCancelledError(operation)

        logger.debug(f"Running: {' '.join(command)}")
        try:
            handle = self._git.execute(command, as_process=True)
        except git.exc.GitCommandNotFound as e:
            logger.debug(f"Could not start {command[0]}: {e}")
            return CommandResult(127, "", str(e))

        process = handle.proc
        deadline = time.monotonic() + self.timeout
        while True:
            try:
                stdout, stderr = process.communicate(timeout=POLL_INTERVAL)
                break
            except subprocess.TimeoutExpired:
                if self._cancelled():
                    process.kill()
                    process.communicate()
                    logger.debug(f"Cancelled: {operation}")
                    raise OperationCancelledError(operation)
                if time.monotonic() >= deadline:
                    process.kill()
                    stdout, stderr = process.communicate()
                    message = f"Timeout: '{operation}' did not complete in {self.timeout:g}s"
                    logger.debug(message)
                    stderr_text = _decode(stderr).rstrip()
                    stderr_text = f"{stderr_text}\n{message}" if stderr_text else message
                    return CommandResult(
                        process.returncode if process.returncode else -1,
                        _decode(stdout),
                        stderr_text,
                        timed_out=True,
                    )

        result = CommandResult(process.returncode, _decode(stdout), _decode(stderr))
        if not result.ok:
            logger.debug(f"'{operation}' exited {result.exit_code}: {result.stderr.strip()}")
        return result
