"""Where: src/mbtagsync/features/tagging/usecases/refresh_notifier.py
What: Queue and issue Plex metadata refreshes for albums whose tags changed.
Why: Plex keeps stale metadata until an album is refreshed; batching the
     refreshes per scan avoids one request per file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mbtagsync.platform.cache import CacheLoadError, TTLCacheStore
from mbtagsync.platform.logging import logger
from mbtagsync.platform.plex import PlexClient, PlexError
from mbtagsync.shared.errors import RefreshResolutionError

from .processing_types import ProcessingEvent, RefreshSet


@dataclass(slots=True)
class RefreshReport:
    """Outcome of one refresh pass."""

    refreshed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


class MetadataRefreshNotifier:
    """Resolve Plex album keys (cached by album title) and refresh them."""

    def __init__(self, client: PlexClient, album_key_cache: TTLCacheStore) -> None:
        self._client: PlexClient = client
        self._cache: TTLCacheStore = album_key_cache
        self._section_id: str | None = None

    def note_change(
        self,
        album_title: str,
        release_artist: str,
        track_title: str,
        unchanged: bool,
        tags_written: int,
        refresh_set: RefreshSet,
    ) -> RefreshSet:
        """Add ``album_title`` to ``refresh_set`` when the file was rewritten.

        Raises:
            RefreshResolutionError: The album could not be located in Plex.
        """

        if unchanged or tags_written == 0:
            return refresh_set
        album_key = self.resolve_album_key(album_title, release_artist, track_title)
        if album_title not in refresh_set:
            logger.info(
                "Queued Plex refresh for %s (%s)",
                album_title,
                album_key,
                extra={"processing_event": ProcessingEvent.REFRESH_QUEUED, "album": album_title},
            )
        refresh_set[album_title] = album_key
        return refresh_set

    def resolve_album_key(self, album_title: str, release_artist: str, track_title: str = "") -> str:
        """Return the Plex album key for ``album_title``, consulting the key cache first.

        Raises:
            RefreshResolutionError: Plex has no such album or the key cache is unusable.
        """

        try:
            cached = self._cache.get_fresh(album_title)
        except CacheLoadError as exc:
            raise RefreshResolutionError(f"Plex album key cache unusable: {exc}") from exc
        if isinstance(cached, str) and cached:
            logger.debug("Plex album key cache hit for %s", album_title)
            return cached

        try:
            section_id = self._music_section_id()
            artist_key = self._client.find_artist_key(section_id, release_artist)
            logger.debug("Plex artist %s -> %s", release_artist, artist_key)
            album_key = self._client.resolve_album_key(
                section_id, release_artist, album_title, track_title
            )
        except PlexError as exc:
            raise RefreshResolutionError(
                f"could not resolve Plex album {album_title!r} by {release_artist!r}: {exc}"
            ) from exc

        try:
            self._cache.put(album_title, album_key)
        except OSError as exc:
            raise RefreshResolutionError(
                f"could not cache Plex album key for {album_title!r}: {exc}"
            ) from exc
        return album_key

    def refresh_albums(self, refresh_set: RefreshSet) -> RefreshReport:
        """Refresh every queued album; failures are logged and reported, not raised."""

        report = RefreshReport()
        for album_title, album_key in refresh_set.items():
            try:
                self._client.refresh_album(album_key)
            except PlexError as exc:
                report.failed[album_title] = str(exc)
                logger.log(
                    logging.WARNING,
                    "Plex refresh failed for %s: %s",
                    album_title,
                    exc,
                    extra={
                        "processing_event": ProcessingEvent.REFRESH_FAILED,
                        "album": album_title,
                        "error_message": str(exc),
                    },
                )
                continue
            report.refreshed.append(album_title)
            logger.info(
                "Refreshed Plex album %s",
                album_title,
                extra={"processing_event": ProcessingEvent.REFRESH_DONE, "album": album_title},
            )
        return report

    def _music_section_id(self) -> str:
        if self._section_id is None:
            self._section_id = self._client.find_music_section_id()
        return self._section_id


__all__ = ["MetadataRefreshNotifier", "RefreshReport"]
