"""Command execution package for CLI."""

from mbtagsync.ui.cli.commands.executor import CommandExecutor
from mbtagsync.ui.cli.commands.health import HealthCommand
from mbtagsync.ui.cli.commands.scan import ScanCommand
from mbtagsync.ui.cli.commands.tag import TagCommand

__all__ = ["CommandExecutor", "HealthCommand", "ScanCommand", "TagCommand"]
