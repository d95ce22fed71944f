"""Application service for tagging music libraries.

This layer builds the catalog, inventory and media-index collaborators from
configuration so the CLI (or any other front-end) only deals with requests
and results.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import final

from mbtagsync.config.config import AppConfig
from mbtagsync.config.settings import (
    LIDARR_ALBUM_CACHE_FILE,
    LIDARR_ARTIST_CACHE_FILE,
    LIDARR_TRACK_CACHE_FILE,
    MB_RELEASE_CACHE_FILE,
    PLEX_ALBUM_KEY_CACHE_FILE,
)
from mbtagsync.features.tagging.adapters import Id3FrameAdapter, VorbisCommentAdapter
from mbtagsync.features.tagging.domain import ArtistCreditMode, ArtistCreditPolicy
from mbtagsync.features.tagging.usecases import (
    FolderScanner,
    IdentifierExtractor,
    InventoryResolver,
    MetadataRefreshNotifier,
    RefreshReport,
    RefreshSet,
    ScanSummary,
    TagWriter,
    TrackProcessor,
    TrackResult,
)
from mbtagsync.platform.cache import TTLCacheStore
from mbtagsync.platform.http import HTTPClient, RequestsHTTPClient
from mbtagsync.platform.lidarr import LidarrClient
from mbtagsync.platform.logging import logger
from mbtagsync.platform.musicbrainz import CatalogClient, RateLimiter, resolve_user_agent
from mbtagsync.platform.plex import PlexClient


@dataclass(frozen=True)
class ScanRequest:
    """Input parameters for a scan.

    Attributes:
        roots: Library roots to walk; the configured roots when empty.
        refresh: Issue the Plex refresh pass after all roots were scanned.
    """

    roots: tuple[Path, ...] = ()
    refresh: bool = True


@dataclass(slots=True)
class ScanOutcome:
    """Per-root summaries plus the optional refresh report."""

    summaries: list[ScanSummary] = field(default_factory=list)
    refresh_set: RefreshSet = field(default_factory=dict)
    refresh_report: RefreshReport | None = None

    @property
    def error_files(self) -> int:
        return sum(summary.error_files for summary in self.summaries)


@final
class TaggingService:
    """Composition root wiring the tagging pipeline from ``AppConfig``."""

    def __init__(
        self,
        config: AppConfig,
        *,
        http_factory: Callable[[], HTTPClient] | None = None,
    ) -> None:
        self.config: AppConfig = config
        http = (http_factory or RequestsHTTPClient)()
        cache_dir = config.cache_dir

        mb = config.musicbrainz
        self.catalog: CatalogClient = CatalogClient(
            http,
            RateLimiter(mb.rate_limit_seconds),
            TTLCacheStore(cache_dir / MB_RELEASE_CACHE_FILE, timedelta(hours=mb.release_cache_hours)),
            resolve_user_agent(mb.app_name, mb.app_version, mb.contact),
            base_url=mb.base_url,
            timeout=mb.timeout_seconds,
        )

        self.lidarr: LidarrClient | None = None
        self.resolver: InventoryResolver | None = None
        if config.lidarr.enabled:
            lidarr_ttl = timedelta(minutes=config.lidarr.cache_minutes)
            self.lidarr = LidarrClient(
                http,
                config.lidarr.url,
                config.lidarr.api_key,
                timeout=config.lidarr.timeout_seconds,
                cookie=config.lidarr.cookie or None,
            )
            self.resolver = InventoryResolver(
                self.lidarr,
                artist_cache=TTLCacheStore(cache_dir / LIDARR_ARTIST_CACHE_FILE, lidarr_ttl),
                track_cache=TTLCacheStore(cache_dir / LIDARR_TRACK_CACHE_FILE, lidarr_ttl),
                album_cache=TTLCacheStore(cache_dir / LIDARR_ALBUM_CACHE_FILE, lidarr_ttl),
            )

        self.plex: PlexClient | None = None
        self.notifier: MetadataRefreshNotifier | None = None
        if config.plex.enabled:
            self.plex = PlexClient(
                http,
                config.plex.url,
                config.plex.token,
                timeout=config.plex.timeout_seconds,
            )
            self.notifier = MetadataRefreshNotifier(
                self.plex,
                TTLCacheStore(
                    cache_dir / PLEX_ALBUM_KEY_CACHE_FILE,
                    timedelta(minutes=config.plex.cache_minutes),
                ),
            )

        tagging = config.tagging
        writer = TagWriter(
            {
                ".flac": VorbisCommentAdapter(tagging.metaflac_path),
                ".mp3": Id3FrameAdapter(tagging.ffmpeg_path, tagging.ffprobe_path),
            }
        )
        self.processor: TrackProcessor = TrackProcessor(
            IdentifierExtractor(),
            self.catalog,
            writer,
            resolver=self.resolver,
            notifier=self.notifier,
            credit_policy=ArtistCreditPolicy(
                mode=ArtistCreditMode(tagging.artist_credit),
                delimiter=tagging.artist_delimiter,
            ),
            write_genre=tagging.write_genre,
        )
        self.scanner: FolderScanner = FolderScanner(self.processor)

    def scan(self, request: ScanRequest) -> ScanOutcome:
        """Scan every requested root, then refresh changed albums once.

        Raises:
            ValueError: No roots were given and none are configured.
            OSError: A directory could not be traversed.
        """

        roots: Sequence[Path] = request.roots or tuple(self.config.library_roots)
        if not roots:
            raise ValueError("No library roots given and none configured")

        outcome = ScanOutcome()
        for root in roots:
            summary = self.scanner.scan(root, outcome.refresh_set)
            outcome.refresh_set = summary.refresh_set
            outcome.summaries.append(summary)

        if request.refresh:
            outcome.refresh_report = self.refresh(outcome.refresh_set)
        return outcome

    def tag_file(self, file_path: Path, library_root: Path, *, refresh: bool = True) -> TrackResult:
        """Tag a single file and optionally refresh its album right away."""

        result = self.processor.process(file_path, library_root)
        if refresh and result.refresh_set:
            _ = self.refresh(result.refresh_set)
        return result

    def refresh(self, refresh_set: RefreshSet) -> RefreshReport | None:
        if self.notifier is None or not refresh_set:
            return None
        logger.info("Refreshing %d Plex album(s)", len(refresh_set))
        return self.notifier.refresh_albums(refresh_set)

    def health_check(self) -> dict[str, bool]:
        """Ping the configured Lidarr and Plex servers."""

        status: dict[str, bool] = {}
        if self.lidarr is not None:
            status["lidarr"] = self.lidarr.health_check()
        if self.plex is not None:
            status["plex"] = self.plex.health_check()
        return status


__all__ = ["ScanOutcome", "ScanRequest", "TaggingService"]
