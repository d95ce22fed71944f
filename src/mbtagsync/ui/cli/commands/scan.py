"""src/mbtagsync/ui/cli/commands/scan.py
What: Run folder scans from the CLI.
Why: Bridge parsed arguments with the tagging service for bulk processing.
"""

from typing import override

from mbtagsync.application.services.tagging_service import ScanRequest
from mbtagsync.ui.cli.args.options import ScanArgs
from mbtagsync.ui.cli.commands.executor import CommandExecutor
from mbtagsync.ui.cli.display.summary import render_scan_summary


class ScanCommand(CommandExecutor):
    """Command for scanning library roots."""

    args: ScanArgs

    @override
    def execute(self) -> int:
        outcome = self.app.scan(ScanRequest(roots=self.args.roots, refresh=self.args.refresh))
        render_scan_summary(self.console, outcome)
        return 1 if outcome.error_files else 0
