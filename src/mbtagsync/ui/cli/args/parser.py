"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from mbtagsync.config.config import AppConfig, load_config
from mbtagsync.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from mbtagsync.ui.cli.args.options import CLIArgs, HealthArgs, ScanArgs, TagArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="mbtagsync - Tag music files from MusicBrainz releases.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            help="Path to the TOML configuration file",
            metavar="CONFIG_PATH",
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        scan_parser = subparsers.add_parser(
            "scan",
            help="Tag every supported file below one or more library roots",
        )
        _ = scan_parser.add_argument(
            "roots",
            nargs="*",
            type=str,
            help="Library roots to scan (defaults to library_roots from the configuration)",
            metavar="ROOT",
        )
        _ = scan_parser.add_argument(
            "--no-refresh",
            action="store_true",
            help="Do not ask Plex to refresh albums whose tags changed",
        )
        ArgumentParser._add_verbosity(scan_parser)

        tag_parser = subparsers.add_parser(
            "tag",
            help="Tag a single file",
        )
        _ = tag_parser.add_argument(
            "file_path",
            type=str,
            help="Audio file to tag",
            metavar="FILE",
        )
        _ = tag_parser.add_argument(
            "--root",
            type=str,
            required=True,
            help="Library root the file lives under",
            metavar="ROOT",
        )
        _ = tag_parser.add_argument(
            "--no-refresh",
            action="store_true",
            help="Do not ask Plex to refresh the album",
        )
        ArgumentParser._add_verbosity(tag_parser)

        health_parser = subparsers.add_parser(
            "health",
            help="Check connectivity to the configured Lidarr and Plex servers",
        )
        ArgumentParser._add_verbosity(health_parser)

        return parser

    @staticmethod
    def _add_verbosity(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Loads the configuration and attaches the log file before returning.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        config_path = Path(parsed_args.config).expanduser() if parsed_args.config else None
        configuration = load_config(path=config_path)
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "scan":
            return ArgumentParser._process_scan(parsed_args, configuration)

        if command == "tag":
            return ArgumentParser._process_tag(parsed_args, configuration)

        if command == "health":
            return HealthArgs(
                command="health",
                verbose=is_verbose,
                quiet=is_quiet,
                config=configuration,
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_scan(parsed_args: argparse.Namespace, configuration: AppConfig) -> ScanArgs:
        roots = tuple(Path(raw).expanduser().resolve() for raw in parsed_args.roots)
        for root in roots:
            if not root.is_dir():
                logger.error("Library root does not exist or is not a directory: %s", root)
                sys.exit(1)
        if not roots and not configuration.library_roots:
            logger.error("No library root given and library_roots is empty in the configuration")
            sys.exit(1)

        return ScanArgs(
            command="scan",
            roots=roots,
            refresh=not parsed_args.no_refresh,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            config=configuration,
        )

    @staticmethod
    def _process_tag(parsed_args: argparse.Namespace, configuration: AppConfig) -> TagArgs:
        file_path = Path(parsed_args.file_path).expanduser().resolve()
        root = Path(parsed_args.root).expanduser().resolve()
        if not file_path.is_file():
            logger.error("File does not exist: %s", file_path)
            sys.exit(1)
        if not root.is_dir():
            logger.error("Library root does not exist or is not a directory: %s", root)
            sys.exit(1)

        return TagArgs(
            command="tag",
            file_path=file_path,
            root=root,
            refresh=not parsed_args.no_refresh,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            config=configuration,
        )
