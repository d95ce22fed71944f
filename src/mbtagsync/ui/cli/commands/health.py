"""src/mbtagsync/ui/cli/commands/health.py
What: Report Lidarr and Plex connectivity.
"""

from typing import override

from mbtagsync.ui.cli.commands.executor import CommandExecutor


class HealthCommand(CommandExecutor):
    """Command for pinging the configured services."""

    @override
    def execute(self) -> int:
        status = self.app.health_check()
        if not status:
            self.console.print("[yellow]Neither Lidarr nor Plex is configured[/yellow]")
            return 0
        for service, healthy in status.items():
            colour = "green" if healthy else "red"
            label = "reachable" if healthy else "unreachable"
            self.console.print(f"[{colour}]{service}: {label}[/{colour}]")
        return 0 if all(status.values()) else 1
