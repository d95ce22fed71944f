"""Tests for the Lidarr v1 REST client."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlsplit

import pytest

from mbtagsync.platform.http import HTTPError, HTTPResponse
from mbtagsync.platform.lidarr import LidarrClient, LidarrError

Handler = Callable[[str, dict[str, str]], HTTPResponse]


class _FakeHTTP:
    def __init__(self, handler: Handler) -> None:
        self._handler: Handler = handler
        self.calls: list[tuple[str, dict[str, str], dict[str, str]]] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float,
    ) -> HTTPResponse:
        path = urlsplit(url).path
        self.calls.append((path, dict(params or {}), dict(headers or {})))
        return self._handler(path, dict(params or {}))


def _json(status: int, body: Any) -> HTTPResponse:
    return HTTPResponse(status=status, text=json.dumps(body))


def test_list_artists_sends_api_key() -> None:
    http = _FakeHTTP(
        lambda path, params: _json(200, [{"id": 1, "artistName": "Band", "path": "/data/Band"}])
    )
    client = LidarrClient(http, "http://lidarr:8686/", "secret")

    artists = client.list_artists()

    assert [(a.id, a.name, a.path) for a in artists] == [(1, "Band", "/data/Band")]
    path, _, headers = http.calls[0]
    assert path == "/api/v1/artist"
    assert headers["X-Api-Key"] == "secret"
    assert "Cookie" not in headers


def test_cookie_header_is_sent_when_configured() -> None:
    http = _FakeHTTP(lambda path, params: _json(200, []))
    client = LidarrClient(http, "http://lidarr:8686", "secret", cookie="session=abc")

    _ = client.list_artists()

    _, _, headers = http.calls[0]
    assert headers["Cookie"] == "session=abc"
    assert headers["X-Api-Key"] == "secret"


def test_list_queries_pass_identifiers() -> None:
    def handler(path: str, params: dict[str, str]) -> HTTPResponse:
        if path == "/api/v1/trackfile":
            return _json(200, [{"id": 10, "path": "/data/Band/Album/01.flac", "albumId": 100, "artistId": 1}])
        if path == "/api/v1/track":
            return _json(200, [{"id": 5, "title": "Song", "foreignTrackId": "trk-1", "trackFileId": 10}])
        return _json(
            200,
            [
                {
                    "id": 100,
                    "artistId": 1,
                    "releases": [{"id": 2, "monitored": True, "foreignReleaseId": "rel-1"}],
                }
            ],
        )

    http = _FakeHTTP(handler)
    client = LidarrClient(http, "http://lidarr:8686", "secret")

    track_files = client.list_track_files(1)
    tracks = client.list_tracks(1, 100)
    albums = client.list_albums(1, 100)

    assert track_files[0].album_id == 100
    assert tracks[0].foreign_track_id == "trk-1"
    assert albums[0].monitored_release_id() == "rel-1"
    assert http.calls[0][1] == {"artistId": "1"}
    assert http.calls[1][1] == {"artistId": "1", "albumId": "100"}
    assert http.calls[2][1] == {"artistId": "1", "albumIds": "100", "includeAllArtistAlbums": "true"}


def test_track_without_file_defaults_to_zero() -> None:
    http = _FakeHTTP(lambda path, params: _json(200, [{"id": 5, "title": "Song", "foreignTrackId": "trk"}]))

    tracks = LidarrClient(http, "http://lidarr", "k").list_tracks(1, 2)

    assert tracks[0].track_file_id == 0


@pytest.mark.parametrize(
    "response",
    [
        HTTPResponse(status=401, reason="Unauthorized", text="bad key"),
        HTTPResponse(status=200, text="not json"),
        HTTPResponse(status=200, text='{"id": 1}'),
        HTTPResponse(status=200, text='[{"artistName": "missing id"}]'),
    ],
    ids=["unauthorized", "bad-json", "not-a-list", "bad-item"],
)
def test_failures_raise_lidarr_error(response: HTTPResponse) -> None:
    client = LidarrClient(_FakeHTTP(lambda path, params: response), "http://lidarr", "k")

    with pytest.raises(LidarrError):
        _ = client.list_artists()


def test_transport_errors_raise_lidarr_error() -> None:
    def handler(path: str, params: dict[str, str]) -> HTTPResponse:
        raise HTTPError("connection refused")

    with pytest.raises(LidarrError, match="connection refused"):
        _ = LidarrClient(_FakeHTTP(handler), "http://lidarr", "k").list_artists()


def test_health_check() -> None:
    healthy = LidarrClient(_FakeHTTP(lambda path, params: _json(200, {"version": "2.0"})), "http://l", "k")
    unhealthy = LidarrClient(
        _FakeHTTP(lambda path, params: HTTPResponse(status=500, reason="Server Error")), "http://l", "k"
    )
    wrong_body = LidarrClient(_FakeHTTP(lambda path, params: _json(200, [])), "http://l", "k")

    assert healthy.health_check() is True
    assert unhealthy.health_check() is False
    assert wrong_body.health_check() is False
