"""src/mbtagsync/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Every command builds the same tagging service and console.
"""

from abc import ABC, abstractmethod

from rich.console import Console

from mbtagsync.application.services.tagging_service import TaggingService
from mbtagsync.ui.cli.args.options import CLIArgs


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: CLIArgs
    app: TaggingService
    console: Console

    def __init__(self, args: CLIArgs) -> None:
        self.args = args
        self.app = TaggingService(args.config)
        self.console = Console(quiet=args.quiet)

    @abstractmethod
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Process exit code.
        """
        pass
