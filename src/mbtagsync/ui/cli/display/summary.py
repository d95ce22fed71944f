"""Utilities for rendering scan and refresh summaries."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from mbtagsync.application.services.tagging_service import ScanOutcome
from mbtagsync.features.tagging.usecases import RefreshReport, TrackResult


def render_scan_summary(console: Console, outcome: ScanOutcome) -> None:
    """Render per-root counters followed by the refresh outcome.

    Args:
        console: Rich console instance used to render output.
        outcome: Result of ``TaggingService.scan``.
    """
    table = Table(title="Scan summary")
    table.add_column("Root")
    table.add_column("Files", justify="right")
    table.add_column("Unchanged", justify="right")
    table.add_column("Tags written", justify="right", style="green")
    table.add_column("Errors", justify="right", style="red")
    for summary in outcome.summaries:
        table.add_row(
            str(summary.root),
            str(summary.files_seen),
            str(summary.unchanged_files),
            str(summary.tags_written),
            str(summary.error_files),
        )
    console.print(table)
    render_refresh_report(console, outcome.refresh_report)


def render_refresh_report(console: Console, report: RefreshReport | None) -> None:
    if report is None:
        return
    console.print(f"[green]Plex albums refreshed: {len(report.refreshed)}[/green]")
    if not report.failed:
        return
    console.print(f"[yellow]Plex refresh failures: {len(report.failed)}[/yellow]")
    for album, message in report.failed.items():
        console.print(f"[yellow]  • {album}: {message}[/yellow]")


def render_track_result(console: Console, result: TrackResult) -> None:
    if result.unchanged:
        console.print(f"[blue]{result.file_path.name}: already up to date[/blue]")
    else:
        console.print(f"[green]{result.file_path.name}: {result.tags_written} tag(s) written[/green]")
    for warning in result.warnings:
        console.print(f"[yellow]  • {warning}[/yellow]")


__all__ = ["render_refresh_report", "render_scan_summary", "render_track_result"]
