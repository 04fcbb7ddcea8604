"""Command-line argument parsing for git-workspace-keeper."""

import argparse

from git_workspace_keeper.__version__ import __version__
from git_workspace_keeper.constants import DEFAULT_TIMEOUT


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="git-workspace-keeper",
        description="List, inspect and create git workspaces under a root directory",
        epilog="Workspaces are bare clones with worktrees (--convention bare) "
        "or plain directories of clones (--convention container).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-workspace-keeper {__version__}")
    parser.add_argument(
        "--root", default=".", help="Directory containing the workspaces (default: current directory)"
    )
    parser.add_argument(
        "--convention",
        choices=["bare", "container"],
        default="bare",
        help="Workspace layout: bare repos with worktrees, or containers of clones (default: bare)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Timeout for each git command (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers for status checks (default: auto-detect)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Force sequential status checks (disable parallelism)",
    )

    subparsers = parser.add_subparsers(dest="action", metavar="ACTION")
    subparsers.required = True

    subparsers.add_parser("list", help="List workspaces and their worktrees or repos")

    status = subparsers.add_parser("status", help="Show the status of one workspace")
    status.add_argument("name", help="Workspace name")

    add = subparsers.add_parser(
        "add", aliases=["clone"], help="Clone a repository as or into a workspace"
    )
    add.add_argument("url", help="Git repository URL")
    add.add_argument("--name", help="Directory name (default: derived from the URL)")
    add.add_argument(
        "--workspace", "-w", help="Workspace to clone into (container convention only)"
    )

    create = subparsers.add_parser("create", help="Create an empty workspace (container convention only)")
    create.add_argument("name", help="Workspace name")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    if args.action == "clone":
        args.action = "add"
    return args
