"""Where: src/mbtagsync/features/tagging/usecases/track_processor.py
What: Tag one audio file from its MusicBrainz release.
Why: Single orchestration point used by the folder scanner and the ``tag`` command.

Steps, stopping at the first hard failure:

1. Read the embedded release and track ids.
2. If either is missing and an inventory resolver is configured, resolve them.
3. Fail with ``IdentifiersUnavailableError`` if either is still missing.
4. Fetch the release document.
5. Derive the desired tags for the track.
6. Diff against the file and write only the changed keys.
7. Queue a media-index refresh when tags changed; failures there are warnings.
"""

from __future__ import annotations

from pathlib import Path

from mbtagsync.features.tagging.domain.release_tags import ArtistCreditPolicy, build_file_tags
from mbtagsync.platform.logging import logger
from mbtagsync.shared.errors import IdentifiersUnavailableError, RefreshResolutionError

from .ports import (
    IdentifierResolverPort,
    IdentifierSourcePort,
    RefreshNotifierPort,
    ReleaseCatalogPort,
    TagWriterPort,
)
from .processing_types import ProcessingEvent, RefreshSet, TrackResult


class TrackProcessor:
    """Run the extraction → catalog → diff → write pipeline for one file."""

    def __init__(
        self,
        extractor: IdentifierSourcePort,
        catalog: ReleaseCatalogPort,
        writer: TagWriterPort,
        *,
        resolver: IdentifierResolverPort | None = None,
        notifier: RefreshNotifierPort | None = None,
        credit_policy: ArtistCreditPolicy | None = None,
        write_genre: bool = False,
    ) -> None:
        self.extractor: IdentifierSourcePort = extractor
        self.catalog: ReleaseCatalogPort = catalog
        self.writer: TagWriterPort = writer
        self.resolver: IdentifierResolverPort | None = resolver
        self.notifier: RefreshNotifierPort | None = notifier
        self.credit_policy: ArtistCreditPolicy = credit_policy or ArtistCreditPolicy()
        self.write_genre: bool = write_genre

    def process(
        self,
        file_path: Path,
        library_root: Path,
        refresh_set: RefreshSet | None = None,
    ) -> TrackResult:
        """Tag ``file_path`` and return the outcome.

        Args:
            file_path: Audio file to tag.
            library_root: Root the file lives under; used for inventory matching.
            refresh_set: Albums already queued for refresh during this scan.

        Returns:
            TrackResult: Unchanged flag, tags written and the updated refresh set.

        Raises:
            TaggingError: Any failure fatal for this file.
        """

        refresh_set = refresh_set if refresh_set is not None else {}

        identifiers = self.extractor.extract_identifiers(file_path)
        if not identifiers.resolvable and self.resolver is not None:
            logger.info("Embedded MusicBrainz ids missing for %s; asking Lidarr", file_path.name)
            identifiers = self.resolver.resolve(file_path, library_root)
        if not identifiers.resolvable:
            raise IdentifiersUnavailableError(f"no MusicBrainz release/track id for {file_path}")

        release = self.catalog.fetch_release(identifiers.release_id)
        tags = build_file_tags(
            release,
            identifiers.track_id,
            policy=self.credit_policy,
            write_genre=self.write_genre,
        )

        change_set = self.writer.plan(file_path, tags)
        outcome = self.writer.write(file_path, change_set)
        result = TrackResult(
            file_path=file_path,
            unchanged=outcome.unchanged,
            tags_written=outcome.tags_written,
            refresh_set=refresh_set,
        )

        if outcome.unchanged:
            logger.info(
                "No tag changes for %s",
                file_path,
                extra={
                    "processing_event": ProcessingEvent.FILE_UNCHANGED,
                    "source_path": str(file_path),
                    "root": str(library_root),
                },
            )
            return result

        logger.info(
            "Wrote %d tags to %s (%s)",
            outcome.tags_written,
            file_path,
            ", ".join(sorted(change_set)),
            extra={
                "processing_event": ProcessingEvent.FILE_TAGGED,
                "source_path": str(file_path),
                "root": str(library_root),
                "tags_written": outcome.tags_written,
            },
        )

        if self.notifier is not None:
            try:
                result.refresh_set = self.notifier.note_change(
                    tags.album or "",
                    tags.album_artist or "",
                    tags.title or "",
                    outcome.unchanged,
                    outcome.tags_written,
                    refresh_set,
                )
            except RefreshResolutionError as exc:
                result.warnings.append(str(exc))
                logger.warning(
                    "%s",
                    exc,
                    extra={
                        "processing_event": ProcessingEvent.REFRESH_FAILED,
                        "album": tags.album,
                        "error_message": str(exc),
                    },
                )
        return result


__all__ = ["TrackProcessor"]
