"""src/mbtagsync/features/tagging/usecases/folder_scanner.py
What: Walk a library tree and tag every supported audio file.
Why: Entry point for scheduled and command-line scans.

Files are processed one at a time in walk order. A failing file is counted
and logged and the walk continues; an unreadable directory aborts the scan.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from mbtagsync.config.settings import is_enabled_extension
from mbtagsync.platform.logging import logger

from .processing_types import ProcessingEvent, RefreshSet, ScanSummary
from .track_processor import TrackProcessor


def _raise_walk_error(error: OSError) -> None:
    raise error


class FolderScanner:
    """Sequentially feed the files below a root to a ``TrackProcessor``."""

    def __init__(self, processor: TrackProcessor) -> None:
        self.processor: TrackProcessor = processor

    def iter_audio_files(self, root: Path) -> Iterator[Path]:
        """Yield files whose extension is enabled, in sorted walk order.

        Raises:
            OSError: A directory could not be listed.
        """

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            dirnames.sort()
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if is_enabled_extension(path.suffix):
                    yield path

    def scan(self, root: Path, refresh_set: RefreshSet | None = None) -> ScanSummary:
        """Tag every supported file below ``root``.

        Args:
            root: Library root to walk; also used for inventory matching.
            refresh_set: Optional refresh set to extend; a new one is used otherwise.

        Returns:
            ScanSummary: Counters plus the albums queued for refresh.

        Raises:
            OSError: Directory traversal failed.
        """

        summary = ScanSummary(root=root, refresh_set=refresh_set if refresh_set is not None else {})
        logger.info(
            "Scan started for %s",
            root,
            extra={"processing_event": ProcessingEvent.SCAN_START, "root": str(root)},
        )

        try:
            for file_path in self.iter_audio_files(root):
                try:
                    result = self.processor.process(file_path, root, summary.refresh_set)
                except Exception as exc:
                    error_message = str(exc) or type(exc).__name__
                    summary.record_failure()
                    logger.log(
                        logging.ERROR,
                        "Failed to tag %s: %s",
                        file_path,
                        error_message,
                        extra={
                            "processing_event": ProcessingEvent.FILE_ERROR,
                            "source_path": str(file_path),
                            "root": str(root),
                            "error_message": error_message,
                        },
                    )
                    continue
                summary.refresh_set = result.refresh_set
                summary.record_result(result)
        except OSError as exc:
            logger.error(
                "Scan aborted for %s: %s",
                root,
                exc,
                extra={
                    "processing_event": ProcessingEvent.SCAN_ERROR,
                    "root": str(root),
                    "error_message": str(exc),
                    **{k: v for k, v in summary.summary_extra().items() if k != "root"},
                },
            )
            raise

        logger.info(
            "Scan complete for %s: %d seen, %d unchanged, %d tags written, %d errors",
            root,
            summary.files_seen,
            summary.unchanged_files,
            summary.tags_written,
            summary.error_files,
            extra={"processing_event": ProcessingEvent.SCAN_COMPLETE, **summary.summary_extra()},
        )
        return summary


__all__ = ["FolderScanner"]
