"""src/mbtagsync/ui/cli/commands/tag.py
What: Tag one file from the CLI.
"""

from typing import override

from mbtagsync.ui.cli.args.options import TagArgs
from mbtagsync.ui.cli.commands.executor import CommandExecutor
from mbtagsync.ui.cli.display.summary import render_track_result


class TagCommand(CommandExecutor):
    """Command for processing a single file."""

    args: TagArgs

    @override
    def execute(self) -> int:
        result = self.app.tag_file(self.args.file_path, self.args.root, refresh=self.args.refresh)
        render_track_result(self.console, result)
        return 0
