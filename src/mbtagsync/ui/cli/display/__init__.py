"""Display management for CLI interface."""

from mbtagsync.ui.cli.display.summary import (
    render_refresh_report,
    render_scan_summary,
    render_track_result,
)

__all__ = ["render_refresh_report", "render_scan_summary", "render_track_result"]
