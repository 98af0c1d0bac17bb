"""The grove commands and the table that registers them."""

import argparse
import os
from dataclasses import dataclass
from typing import Callable, Dict

from rich.console import Console
from rich.table import Table

from git_grove.config import Config
from git_grove.core import Grove, name_of, new_grove, to_grove

console = Console()


@dataclass(frozen=True)
class Command:
    """One entry of the command table."""

    name: str
    help: str
    description: str
    configure: Callable[[argparse.ArgumentParser], None]
    run: Callable[[argparse.Namespace, Config], int]


def _configure_init(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("repo", help="URL of the repository")
    parser.add_argument(
        "directory",
        nargs="?",
        help="Where to create the grove (default: the repository's name, in the current directory)",
    )
    parser.add_argument(
        "--all-branches",
        action="store_true",
        help="Also create a tree for every other branch of the remote",
    )


def run_init(args: argparse.Namespace, config: Config) -> int:
    directory = args.directory or name_of(args.repo)
    default_tree = new_grove(args.repo, directory, config, all_branches=args.all_branches)
    console.print(f"[green]Created grove {directory}[/green]")
    console.print(f'Run "cd {os.path.relpath(default_tree)}" to enter the default tree.')
    return 0


def _configure_add(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("tree", help="Path of the new tree, relative to the grove root unless absolute")


def run_add(args: argparse.Namespace, config: Config) -> int:
    grove = Grove.open(config=config)
    path = grove.add_tree(args.tree)
    console.print(f"[green]Added tree {path}[/green]")
    return 0


def _configure_convert(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", default=".", help="Repository to convert (default: .)")


def run_convert(args: argparse.Namespace, config: Config) -> int:
    destination = to_grove(args.path, config)
    console.print(f"[green]Converted {args.path} to a grove; the checkout is now at {destination}[/green]")
    return 0


def _configure_list(parser: argparse.ArgumentParser) -> None:
    pass


def run_list(args: argparse.Namespace, config: Config) -> int:
    grove = Grove.open(config=config)
    root = grove.root()

    table = Table(title=root)
    table.add_column("Tree")
    table.add_column("Branch")
    table.add_column("Commit")
    table.add_column("Status")
    for tree in grove.trees():
        status = "orphaned" if tree.is_orphaned else "active"
        if tree.is_main:
            status += " (main)"
        table.add_row(
            os.path.relpath(tree.path, root),
            tree.branch_name or "(detached)",
            tree.commit_sha[:8],
            status,
        )
    console.print(table)
    return 0


def build_commands() -> Dict[str, Command]:
    """Build the command table, keyed by command name."""
    commands = [
        Command(
            name="init",
            help="Initialize new grove",
            description=(
                "Initialize a new grove with the provided repository.\n\n"
                "A directory can optionally be supplied to indicate where the grove should be created; "
                "if none is provided\nthe grove is created in the current directory, with the same name "
                "as the repo.\n\n"
                "Example:\n"
                "  grove init https://github.com/torvalds/linux.git\n"
                '  Run "cd linux/master" to enter the default worktree.'
            ),
            configure=_configure_init,
            run=run_init,
        ),
        Command(
            name="add",
            help="Add a new tree to the grove",
            description=(
                "Adds a new tree to the grove.\n\n"
                "The new worktree is created at the given path relative to the grove's root, unless "
                "prefixed by '/'\n- in which case, an absolute path is assumed.\n\n"
                "In all cases, any directory which does not already exist is created with mode 0700."
            ),
            configure=_configure_add,
            run=run_add,
        ),
        Command(
            name="convert",
            help="Convert an existing git repository to a grove",
            description=(
                "Converts the repository checked out at <path> into a grove rooted at <path>.\n\n"
                "The checkout is moved into a subdirectory named after its current branch."
            ),
            configure=_configure_convert,
            run=run_convert,
        ),
        Command(
            name="list",
            help="List the trees of the grove",
            description="Lists every worktree of the grove's repository.",
            configure=_configure_list,
            run=run_list,
        ),
    ]
    return {command.name: command for command in commands}
