"""Command-line entry point for git-workspace-keeper"""

import sys
import threading

from rich.console import Console

from git_workspace_keeper.cli.args import parse_args
from git_workspace_keeper.config import Config
from git_workspace_keeper.tool import WorkspaceTool
from git_workspace_keeper.utils.logging import setup_logging
from git_workspace_keeper.utils.threading import get_threading_info

console = Console()


def _request_params(parsed_args) -> dict:
    params = {"action": parsed_args.action}
    for key in ("name", "url", "workspace"):
        value = getattr(parsed_args, key, None)
        if value:
            params[key] = value
    return params


def main(argv=None) -> int:
    """Main entry point for the application."""
    cancel_event = threading.Event()
    try:
        parsed_args = parse_args(argv)

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = Config(
            root=parsed_args.root,
            convention=parsed_args.convention,
            timeout=parsed_args.timeout,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            sequential=parsed_args.sequential,
            workers=parsed_args.workers,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            threading_info = get_threading_info()
            console.print("[yellow]Threading Information:[/yellow]")
            for key, value in threading_info.items():
                console.print(f"  {key}: {value}")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")
            console.print("[dim]Note: Debug mode forces sequential status checks for readable logs[/dim]")

        tool = WorkspaceTool(config)
        response = tool.execute(_request_params(parsed_args), cancel_event=cancel_event)

        if response.is_error:
            console.print(response.text, style="red", markup=False, highlight=False)
            return 1
        console.print(response.text, markup=False, highlight=False)
        return 0
    except KeyboardInterrupt:
        cancel_event.set()
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except ValueError as e:
        console.print(f"Error: {e}", style="red", markup=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())
