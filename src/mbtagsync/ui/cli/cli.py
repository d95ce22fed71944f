"""Command line interface for mbtagsync."""

import sys
from typing import final

from mbtagsync.platform.logging import logger
from mbtagsync.ui.cli.args import ArgumentParser
from mbtagsync.ui.cli.args.options import CLIArgs, ScanArgs, TagArgs
from mbtagsync.ui.cli.commands import CommandExecutor, HealthCommand, ScanCommand, TagCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            command: CommandExecutor
            if isinstance(args, ScanArgs):
                command = ScanCommand(args)
            elif isinstance(args, TagArgs):
                command = TagCommand(args)
            else:
                command = HealthCommand(args)

            exit_code = command.execute()
            if exit_code:
                sys.exit(exit_code)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failing commands exit through
        ``sys.exit`` before this return is reached.
    """
    CommandProcessor.process_command()
    return 0
