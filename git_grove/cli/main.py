"""Entry point for the grove command."""

import sys
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from git_grove.cli.args import build_parser
from git_grove.cli.commands import Command, build_commands
from git_grove.config import Config
from git_grove.logging_config import get_logger, setup_logging

err_console = Console(stderr=True)
logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None, commands: Optional[Dict[str, Command]] = None) -> int:
    """Main entry point for the application.

    Returns:
        The process exit code
    """
    commands = commands if commands is not None else build_commands()
    parser = build_parser(commands)
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        return 0

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config(
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            remote_timeout=parsed_args.timeout,
        )
        logger.debug(f"Configuration: {config.to_dict()}")
        return commands[parsed_args.command].run(parsed_args, config)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
