"""Tests for wiring the tagging pipeline from configuration."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from mbtagsync.application.services.tagging_service import ScanRequest, TaggingService
from mbtagsync.config.config import AppConfig, LidarrSettings, PlexSettings, TaggingSettings
from mbtagsync.features.tagging.adapters import Id3FrameAdapter, VorbisCommentAdapter
from mbtagsync.features.tagging.domain import ArtistCreditMode
from mbtagsync.features.tagging.usecases import RefreshReport, RefreshSet, ScanSummary
from mbtagsync.platform.http import HTTPResponse


class _OfflineHTTP:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float,
    ) -> HTTPResponse:
        self.calls.append(url)
        return HTTPResponse(status=503, reason="Service Unavailable")


class _FakeScanner:
    def __init__(self) -> None:
        self.roots: list[Path] = []

    def scan(self, root: Path, refresh_set: RefreshSet | None = None) -> ScanSummary:
        self.roots.append(root)
        refresh_set = refresh_set if refresh_set is not None else {}
        refresh_set[root.name] = f"/library/metadata/{root.name}"
        return ScanSummary(root=root, files_seen=2, error_files=1, refresh_set=refresh_set)


class _FakeNotifier:
    def __init__(self) -> None:
        self.refreshed: list[RefreshSet] = []

    def refresh_albums(self, refresh_set: RefreshSet) -> RefreshReport:
        self.refreshed.append(dict(refresh_set))
        return RefreshReport(refreshed=list(refresh_set))


def _config(tmp_path: Path, **overrides: object) -> AppConfig:
    config = AppConfig(cache_dir=tmp_path / "cache")
    for name, value in overrides.items():
        setattr(config, name, value)
    return config


def test_optional_services_are_disabled_by_default(tmp_path: Path) -> None:
    http = _OfflineHTTP()
    service = TaggingService(_config(tmp_path), http_factory=lambda: http)

    assert service.resolver is None
    assert service.notifier is None
    assert service.processor.resolver is None
    assert service.health_check() == {}
    assert http.calls == []


def test_configured_services_are_wired(tmp_path: Path) -> None:
    http = _OfflineHTTP()
    config = _config(
        tmp_path,
        lidarr=LidarrSettings(url="http://lidarr:8686", api_key="key"),
        plex=PlexSettings(url="http://plex:32400", token="tok"),
        tagging=TaggingSettings(artist_credit="canonical", write_genre=True),
    )

    service = TaggingService(config, http_factory=lambda: http)

    assert service.processor.resolver is service.resolver is not None
    assert service.processor.notifier is service.notifier is not None
    assert service.processor.credit_policy.mode is ArtistCreditMode.CANONICAL
    assert service.processor.write_genre is True
    assert service.health_check() == {"lidarr": False, "plex": False}


def test_writer_dispatches_by_extension(tmp_path: Path) -> None:
    service = TaggingService(_config(tmp_path), http_factory=_OfflineHTTP)
    adapters = service.processor.writer._adapters  # pyright: ignore[reportAttributeAccessIssue, reportPrivateUsage]

    assert isinstance(adapters[".flac"], VorbisCommentAdapter)
    assert isinstance(adapters[".mp3"], Id3FrameAdapter)


def test_scan_requires_roots(tmp_path: Path) -> None:
    service = TaggingService(_config(tmp_path), http_factory=_OfflineHTTP)

    with pytest.raises(ValueError):
        _ = service.scan(ScanRequest())


def test_scan_uses_configured_roots_and_refreshes_once(tmp_path: Path) -> None:
    roots = [tmp_path / "a", tmp_path / "b"]
    service = TaggingService(_config(tmp_path, library_roots=roots), http_factory=_OfflineHTTP)
    scanner = _FakeScanner()
    notifier = _FakeNotifier()
    service.scanner = scanner  # pyright: ignore[reportAttributeAccessIssue]
    service.notifier = notifier  # pyright: ignore[reportAttributeAccessIssue]

    outcome = service.scan(ScanRequest())

    assert scanner.roots == roots
    assert outcome.error_files == 2
    assert outcome.refresh_set == {"a": "/library/metadata/a", "b": "/library/metadata/b"}
    assert notifier.refreshed == [outcome.refresh_set]
    assert outcome.refresh_report is not None
    assert outcome.refresh_report.refreshed == ["a", "b"]


def test_scan_without_refresh(tmp_path: Path) -> None:
    service = TaggingService(_config(tmp_path), http_factory=_OfflineHTTP)
    notifier = _FakeNotifier()
    service.scanner = _FakeScanner()  # pyright: ignore[reportAttributeAccessIssue]
    service.notifier = notifier  # pyright: ignore[reportAttributeAccessIssue]

    outcome = service.scan(ScanRequest(roots=(tmp_path,), refresh=False))

    assert outcome.refresh_report is None
    assert notifier.refreshed == []
