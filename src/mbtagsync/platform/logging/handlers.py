"""Rich console handler for structured processing events.

Where: platform/logging/handlers.py
What: Render scan/file/refresh events with icons, colours and compact paths.
Why: Keep handler formatting separate from logger setup.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class ProcessingRichHandler(RichHandler):
    """Rich handler that renders processing events and shortens paths."""

    _PROCESSING_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "scan.start": ("🚀", "cyan"),
        "scan.complete": ("✅", "green"),
        "scan.error": ("❌", "red"),
        "file.tagged": ("🏷️", "green"),
        "file.unchanged": ("♻️", "blue"),
        "file.error": ("⛔", "red"),
        "refresh.queued": ("🔁", "magenta"),
        "refresh.done": ("📡", "green"),
        "refresh.failed": ("⚠️", "yellow"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path relative to ``base`` with magenta separators.

        Args:
            path: Absolute or relative path string to format.
            base: Optional base path used to relativize ``path`` when possible.

        Returns:
            Text: Styled path, truncated to the last few segments.
        """
        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and pure_path.is_relative_to(base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = ""
        if truncated:
            display_string = "…" + separator
        elif anchor:
            display_string = anchor if anchor.endswith(separator) else anchor + separator
        display_string += separator.join(body_parts)

        text = Text()
        for char in display_string or ".":
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_processing_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured processing events with dedicated styling."""

        event = getattr(record, "processing_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._PROCESSING_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event.startswith("scan."):
            _ = body.append(
                {
                    "scan.start": "Scan started",
                    "scan.complete": "Scan complete",
                }.get(event, "Scan failed")
            )
            metrics: list[str] = []
            for name in ("files_seen", "unchanged_files", "tags_written", "error_files"):
                value = getattr(record, name, None)
                if isinstance(value, int):
                    metrics.append(f"{name.replace('_', ' ')}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            error = getattr(record, "error_message", None)
            if error:
                metrics.append(str(error))
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
            root = getattr(record, "root", None)
            if root:
                _ = body.append(" @ ")
                _ = body.append_text(self._format_path(str(root)))
        elif event.startswith("file."):
            prefix = {
                "file.tagged": "Tagged ",
                "file.unchanged": "Unchanged ",
                "file.error": "Failed ",
            }.get(event, "")
            _ = body.append(prefix)
            source_path = getattr(record, "source_path", None)
            if source_path:
                _ = body.append_text(
                    self._format_path(str(source_path), base=getattr(record, "root", None))
                )
            details: list[str] = []
            tags_written = getattr(record, "tags_written", None)
            if event == "file.tagged" and isinstance(tags_written, int):
                details.append(f"{tags_written} tags")
            error_message = getattr(record, "error_message", None)
            if event == "file.error" and error_message:
                details.append(str(error_message))
            if details:
                _ = body.append(" (" + ", ".join(details) + ")")
        else:
            album = getattr(record, "album", None)
            _ = body.append(
                {
                    "refresh.queued": "Refresh queued",
                    "refresh.done": "Refreshed",
                }.get(event, "Refresh failed")
            )
            if album:
                _ = body.append(f" '{album}'")
            error_message = getattr(record, "error_message", None)
            if error_message:
                _ = body.append(f" ({error_message})")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        processing_text = self._render_processing_message(record)
        if processing_text is not None:
            return processing_text
        return super().render_message(record, message)


__all__ = ["ProcessingRichHandler"]
