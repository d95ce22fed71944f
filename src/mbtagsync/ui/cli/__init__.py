"""Command line surface for mbtagsync."""

from mbtagsync.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
