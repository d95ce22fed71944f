"""src/mbtagsync/features/tagging/usecases/processing_types.py
Where: Tagging feature usecases layer.
What: Shared enums and dataclasses for the tagging flow.
Why: Keep the processor and scanner lean by centralising type definitions.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any


class ProcessingEvent(StrEnum):
    """Structured event identifiers rendered by the console handler."""

    SCAN_START = "scan.start"
    SCAN_COMPLETE = "scan.complete"
    SCAN_ERROR = "scan.error"
    FILE_TAGGED = "file.tagged"
    FILE_UNCHANGED = "file.unchanged"
    FILE_ERROR = "file.error"
    REFRESH_QUEUED = "refresh.queued"
    REFRESH_DONE = "refresh.done"
    REFRESH_FAILED = "refresh.failed"


# Album title -> media-index album key, accumulated over one scan.
RefreshSet = dict[str, str]


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of applying a change set to one file."""

    unchanged: bool
    tags_written: int = 0


@dataclass(slots=True)
class TrackResult:
    """Outcome of processing one file."""

    file_path: Path
    unchanged: bool
    tags_written: int
    refresh_set: RefreshSet = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ScanSummary:
    """Aggregate counters for one folder scan."""

    root: Path
    files_seen: int = 0
    unchanged_files: int = 0
    tags_written: int = 0
    error_files: int = 0
    refresh_set: RefreshSet = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)

    def record_result(self, result: TrackResult) -> None:
        self.files_seen += 1
        if result.unchanged:
            self.unchanged_files += 1
        self.tags_written += result.tags_written

    def record_failure(self) -> None:
        self.files_seen += 1
        self.error_files += 1

    def duration_seconds(self) -> float:
        return time.perf_counter() - self.start_time

    def summary_extra(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "root": str(self.root),
            "files_seen": self.files_seen,
            "unchanged_files": self.unchanged_files,
            "tags_written": self.tags_written,
            "error_files": self.error_files,
            "duration_seconds": round(self.duration_seconds(), 4),
        }


__all__ = [
    "ProcessingEvent",
    "RefreshSet",
    "ScanSummary",
    "TrackResult",
    "WriteResult",
]
