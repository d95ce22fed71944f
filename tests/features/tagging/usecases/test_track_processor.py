"""Tests for the single-file tagging pipeline."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any

import pytest

from mbtagsync.features.tagging.domain import desired_tag_map
from mbtagsync.features.tagging.usecases import (
    MetadataRefreshNotifier,
    RefreshSet,
    TagWriter,
    TrackProcessor,
)
from mbtagsync.platform.cache import TTLCacheStore
from mbtagsync.platform.musicbrainz.models import CatalogRelease
from mbtagsync.shared.errors import (
    CatalogFetchError,
    IdentifiersUnavailableError,
    RefreshResolutionError,
    TrackNotFoundError,
)
from mbtagsync.shared.file_tags import FileTags, ReleaseIdentifiers, TagChangeSet

ROOT = Path("/srv/music")
FILE = ROOT / "Band" / "Album Title" / "CD2" / "03 Third Song.flac"


class _FakeExtractor:
    def __init__(self, identifiers: ReleaseIdentifiers) -> None:
        self.identifiers: ReleaseIdentifiers = identifiers

    def extract_identifiers(self, file_path: Path) -> ReleaseIdentifiers:
        return self.identifiers


class _FakeResolver:
    def __init__(self, identifiers: ReleaseIdentifiers) -> None:
        self.identifiers: ReleaseIdentifiers = identifiers
        self.calls: list[tuple[Path, Path]] = []

    def resolve(self, file_path: Path, library_root: Path) -> ReleaseIdentifiers:
        self.calls.append((file_path, library_root))
        return self.identifiers


class _FakeCatalog:
    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload: dict[str, Any] = payload
        self.requested: list[str] = []

    def fetch_release(self, release_id: str) -> CatalogRelease:
        self.requested.append(release_id)
        if release_id != self.payload["id"]:
            raise CatalogFetchError(f"release {release_id}: 404 Not Found")
        return CatalogRelease.from_payload(self.payload)


class _InMemoryVorbisAdapter:
    """Vorbis-like adapter keeping tags in a dict."""

    def __init__(self, tags: dict[str, list[str]] | None = None) -> None:
        self.tags: dict[str, list[str]] = dict(tags or {})
        self.apply_calls: int = 0

    def read_existing(self, file_path: Path) -> dict[str, list[str]]:
        return {key: list(values) for key, values in self.tags.items()}

    def desired_map(self, tags: FileTags) -> dict[str, str]:
        return desired_tag_map(tags, include_release_date=True)

    def apply(self, file_path: Path, change_set: TagChangeSet) -> int:
        self.apply_calls += 1
        for key, value in change_set.items():
            self.tags[key] = [value]
        return len(change_set)


class _FakeNotifier:
    def __init__(self, error: Exception | None = None) -> None:
        self.error: Exception | None = error
        self.calls: list[tuple[str, str, str]] = []

    def note_change(
        self,
        album_title: str,
        release_artist: str,
        track_title: str,
        unchanged: bool,
        tags_written: int,
        refresh_set: RefreshSet,
    ) -> RefreshSet:
        self.calls.append((album_title, release_artist, track_title))
        if self.error is not None:
            raise self.error
        refresh_set[album_title] = "/library/metadata/20"
        return refresh_set


def _processor(
    payload: dict[str, Any],
    adapter: _InMemoryVorbisAdapter,
    identifiers: ReleaseIdentifiers = ReleaseIdentifiers("rel-1", "t2-3"),
    **kwargs: Any,
) -> TrackProcessor:
    return TrackProcessor(
        _FakeExtractor(identifiers),
        _FakeCatalog(payload),
        TagWriter({".flac": adapter}),
        **kwargs,
    )


def test_first_run_writes_all_known_tags_then_is_idempotent(release_payload: dict[str, Any]) -> None:
    adapter = _InMemoryVorbisAdapter()
    processor = _processor(release_payload, adapter)

    first = processor.process(FILE, ROOT)
    second = processor.process(FILE, ROOT)

    assert not first.unchanged
    assert first.tags_written == 14
    assert adapter.tags["TRACKNUMBER"] == ["3"]
    assert adapter.tags["TRACKTOTAL"] == ["7"]
    assert adapter.tags["DISCNUMBER"] == ["2"]
    assert adapter.tags["DISCTOTAL"] == ["2"]
    assert adapter.tags["ARTIST"] == ["Band feat. Singer"]
    assert adapter.tags["RELEASEDATE"] == ["2020-05-01"]
    assert "GENRE" not in adapter.tags
    assert second.unchanged
    assert second.tags_written == 0
    assert adapter.apply_calls == 1


def test_only_stale_tags_are_rewritten(release_payload: dict[str, Any]) -> None:
    adapter = _InMemoryVorbisAdapter()
    processor = _processor(release_payload, adapter)
    _ = processor.process(FILE, ROOT)
    adapter.tags["TITLE"] = ["third song (demo)"]
    adapter.tags["GENRE"] = ["Rock"]

    result = processor.process(FILE, ROOT)

    assert result.tags_written == 1
    assert adapter.tags["TITLE"] == ["Third Song"]
    assert adapter.tags["GENRE"] == ["Rock"]


def test_missing_ids_are_resolved_from_inventory(release_payload: dict[str, Any]) -> None:
    resolver = _FakeResolver(ReleaseIdentifiers("rel-1", "t2-3"))
    processor = _processor(
        release_payload,
        _InMemoryVorbisAdapter(),
        identifiers=ReleaseIdentifiers("rel-1", ""),
        resolver=resolver,
    )

    result = processor.process(FILE, ROOT)

    assert resolver.calls == [(FILE, ROOT)]
    assert result.tags_written == 14


def test_embedded_ids_skip_inventory(release_payload: dict[str, Any]) -> None:
    resolver = _FakeResolver(ReleaseIdentifiers("other", "other"))
    processor = _processor(release_payload, _InMemoryVorbisAdapter(), resolver=resolver)

    _ = processor.process(FILE, ROOT)

    assert resolver.calls == []


def test_missing_ids_without_inventory_fail(release_payload: dict[str, Any]) -> None:
    processor = _processor(release_payload, _InMemoryVorbisAdapter(), identifiers=ReleaseIdentifiers())

    with pytest.raises(IdentifiersUnavailableError):
        _ = processor.process(FILE, ROOT)


def test_track_absent_from_release_fails(release_payload: dict[str, Any]) -> None:
    adapter = _InMemoryVorbisAdapter()
    processor = _processor(release_payload, adapter, identifiers=ReleaseIdentifiers("rel-1", "t9-9"))

    with pytest.raises(TrackNotFoundError):
        _ = processor.process(FILE, ROOT)
    assert adapter.apply_calls == 0


def test_changed_file_is_queued_for_refresh(release_payload: dict[str, Any]) -> None:
    notifier = _FakeNotifier()
    processor = _processor(release_payload, _InMemoryVorbisAdapter(), notifier=notifier)
    refresh_set: RefreshSet = {}

    first = processor.process(FILE, ROOT, refresh_set)
    second = processor.process(FILE, ROOT, refresh_set)

    assert first.refresh_set == {"Album Title": "/library/metadata/20"}
    assert notifier.calls == [("Album Title", "Band", "Third Song")]
    assert second.unchanged


def test_refresh_resolution_failure_is_a_warning(release_payload: dict[str, Any]) -> None:
    notifier = _FakeNotifier(RefreshResolutionError("album not found"))
    processor = _processor(release_payload, _InMemoryVorbisAdapter(), notifier=notifier)

    result = processor.process(FILE, ROOT)

    assert not result.unchanged
    assert result.warnings == ["album not found"]
    assert result.refresh_set == {}


class _UnreachablePlex:
    def find_music_section_id(self) -> str:
        raise AssertionError("Plex must not be queried")


def test_corrupt_album_key_cache_is_a_warning(tmp_path: Path, release_payload: dict[str, Any]) -> None:
    cache_path = tmp_path / "plex_album_keys.json"
    _ = cache_path.write_text("[1, 2", encoding="utf-8")
    notifier = MetadataRefreshNotifier(
        _UnreachablePlex(),  # pyright: ignore[reportArgumentType]
        TTLCacheStore(cache_path, timedelta(hours=1)),
    )
    adapter = _InMemoryVorbisAdapter()
    processor = _processor(release_payload, adapter, notifier=notifier)

    result = processor.process(FILE, ROOT)

    assert not result.unchanged
    assert result.tags_written == 14
    assert adapter.tags["TITLE"] == ["Third Song"]
    assert len(result.warnings) == 1
    assert "cache unusable" in result.warnings[0]
    assert result.refresh_set == {}
