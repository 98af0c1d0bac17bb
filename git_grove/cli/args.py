"""Command-line argument parsing for git-grove."""

import argparse
from typing import TYPE_CHECKING, Mapping

from git_grove.__version__ import __version__
from git_grove.constants import DEFAULT_REMOTE_TIMEOUT

if TYPE_CHECKING:
    from git_grove.cli.commands import Command


def build_parser(commands: Mapping[str, "Command"]) -> argparse.ArgumentParser:
    """Build the argument parser for the given command table."""
    parser = argparse.ArgumentParser(
        prog="grove",
        description="Manage git worktrees seamlessly",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REMOTE_TIMEOUT,
        metavar="SECONDS",
        help=f"Deadline for listing and cloning remote repositories (default: {DEFAULT_REMOTE_TIMEOUT})",
    )
    parser.add_argument("--version", action="version", version=f"grove {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    for command in commands.values():
        subparser = subparsers.add_parser(
            command.name,
            help=command.help,
            description=command.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        command.configure(subparser)

    return parser
