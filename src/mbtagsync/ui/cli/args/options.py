"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from mbtagsync.config.config import AppConfig


@final
@dataclass(slots=True)
class ScanArgs:
    """Command line arguments for the ``scan`` subcommand."""

    command: Literal["scan"]
    roots: tuple[Path, ...]
    refresh: bool
    verbose: bool
    quiet: bool
    config: AppConfig


@final
@dataclass(slots=True)
class TagArgs:
    """Command line arguments for the ``tag`` subcommand."""

    command: Literal["tag"]
    file_path: Path
    root: Path
    refresh: bool
    verbose: bool
    quiet: bool
    config: AppConfig


@final
@dataclass(slots=True)
class HealthArgs:
    """Command line arguments for the ``health`` subcommand."""

    command: Literal["health"]
    verbose: bool
    quiet: bool
    config: AppConfig


CLIArgs = ScanArgs | TagArgs | HealthArgs

__all__ = ["CLIArgs", "HealthArgs", "ScanArgs", "TagArgs"]
