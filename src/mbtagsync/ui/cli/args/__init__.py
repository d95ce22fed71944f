"""Command line argument handling package."""

from mbtagsync.ui.cli.args.parser import ArgumentParser
from mbtagsync.ui.cli.args.options import CLIArgs, HealthArgs, ScanArgs, TagArgs

__all__ = ["ArgumentParser", "CLIArgs", "HealthArgs", "ScanArgs", "TagArgs"]
