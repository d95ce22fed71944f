"""Where: src/mbtagsync/platform/lidarr/client.py
What: Minimal Lidarr v1 REST client for artist, track file, track and album lists.
Why: The inventory resolver recovers catalog ids from Lidarr when files carry none.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any, Final, TypeVar, cast

from mbtagsync.platform.http import HTTPClient, HTTPError
from mbtagsync.platform.logging import logger

from .models import (
    LidarrAlbum,
    LidarrArtist,
    LidarrPayloadError,
    LidarrTrack,
    LidarrTrackFile,
)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 15.0

_T = TypeVar("_T")


class LidarrError(Exception):
    """Raised when a Lidarr request fails or returns an unexpected body."""


class LidarrClient:
    """Issue authenticated GET requests against one Lidarr instance."""

    def __init__(
        self,
        http: HTTPClient,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        cookie: str | None = None,
    ) -> None:
        self._http: HTTPClient = http
        self.base_url: str = base_url.rstrip("/")
        self._api_key: str = api_key
        self.timeout: float = timeout
        # Session cookie for instances behind an authenticating reverse proxy.
        self._cookie: str | None = cookie or None

    def list_artists(self) -> list[LidarrArtist]:
        return self._get_list("/api/v1/artist", None, LidarrArtist.from_payload)

    def list_track_files(self, artist_id: int) -> list[LidarrTrackFile]:
        return self._get_list(
            "/api/v1/trackfile",
            {"artistId": str(artist_id)},
            LidarrTrackFile.from_payload,
        )

    def list_tracks(self, artist_id: int, album_id: int) -> list[LidarrTrack]:
        return self._get_list(
            "/api/v1/track",
            {"artistId": str(artist_id), "albumId": str(album_id)},
            LidarrTrack.from_payload,
        )

    def list_albums(self, artist_id: int, album_id: int) -> list[LidarrAlbum]:
        return self._get_list(
            "/api/v1/album",
            {
                "artistId": str(artist_id),
                "albumIds": str(album_id),
                "includeAllArtistAlbums": "true",
            },
            LidarrAlbum.from_payload,
        )

    def health_check(self) -> bool:
        """Return ``True`` when ``/api/v1/system/status`` answers with a JSON object."""

        try:
            payload = self._get_json("/api/v1/system/status", None)
        except LidarrError as exc:
            logger.warning("Lidarr health check failed: %s", exc)
            return False
        if not isinstance(payload, dict):
            logger.warning("Lidarr health check returned an unexpected body")
            return False
        version = cast(dict[str, Any], payload).get("version", "")
        logger.debug("Lidarr reachable (version %s)", version)
        return True

    def _get_list(
        self,
        path: str,
        params: Mapping[str, str] | None,
        decode: Callable[[Any], _T],
    ) -> list[_T]:
        payload = self._get_json(path, params)
        if not isinstance(payload, list):
            raise LidarrError(f"lidarr {path}: expected a JSON array")
        try:
            return [decode(item) for item in cast(list[Any], payload)]
        except LidarrPayloadError as exc:
            raise LidarrError(f"lidarr {path}: {exc}") from exc

    def _get_json(self, path: str, params: Mapping[str, str] | None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("Lidarr GET %s %s", path, dict(params) if params else "")
        headers = {"X-Api-Key": self._api_key, "Accept": "application/json"}
        if self._cookie is not None:
            headers["Cookie"] = self._cookie
        try:
            response = self._http.request(
                "GET",
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except HTTPError as exc:
            raise LidarrError(f"lidarr {path}: {exc}") from exc

        if response.status != 200:
            raise LidarrError(f"lidarr {path} -> {response.status_text}: {response.text.strip()}")
        try:
            return json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise LidarrError(f"lidarr {path}: invalid JSON: {exc}") from exc


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "LidarrClient", "LidarrError"]
