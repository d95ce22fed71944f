"""Where: src/mbtagsync/platform/plex/client.py
What: Plex Media Server client for album lookup and metadata refresh.
Why: After tags change, Plex must rescan the album so it picks up the new values.

Lookups compare titles after canonicalization because Plex titles may differ
from tag values in case, whitespace or Unicode composition.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from mbtagsync.platform.http import HTTPClient, HTTPError, HTTPResponse
from mbtagsync.platform.logging import logger
from mbtagsync.shared.canonical import canon

from .models import (
    PlexMediaContainer,
    PlexPayloadError,
    normalize_album_key,
    parse_identity,
    parse_media_container,
)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

# Plex search ``type`` values.
ARTIST_TYPE: Final[str] = "8"
ALBUM_TYPE: Final[str] = "9"
TRACK_TYPE: Final[str] = "10"

_REFRESH_OK: Final[frozenset[int]] = frozenset({200, 204})
_REFRESH_RETRY_WITH_PUT: Final[frozenset[int]] = frozenset({404, 405})


class PlexError(Exception):
    """Raised when a Plex request fails or returns an unusable body."""


class PlexNotFoundError(PlexError):
    """Raised when no section, artist or album matches the query."""


class PlexClient:
    """Talk to one Plex server authenticated by ``X-Plex-Token``."""

    def __init__(
        self,
        http: HTTPClient,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http: HTTPClient = http
        self.base_url: str = base_url.rstrip("/")
        self._token: str = token
        self.timeout: float = timeout

    # Lookups ------------------------------------------------------------------

    def find_music_section_id(self) -> str:
        """Return the key of the first library section of type ``artist``."""

        container = self._get_container("/library/sections", None)
        for directory in container.directories:
            if directory.type.lower() == "artist":
                return directory.key
        raise PlexNotFoundError("no music section found (type=artist)")

    def find_artist_key(self, section_id: str, artist_name: str) -> str:
        container = self._get_container(
            f"/library/sections/{section_id}/all",
            {"type": ARTIST_TYPE, "title": artist_name},
        )
        wanted = canon(artist_name)
        for directory in container.directories:
            if directory.type == "artist" and canon(directory.title) == wanted:
                return directory.key
        raise PlexNotFoundError(f"artist not found: {artist_name}")

    def resolve_album_key(
        self,
        section_id: str,
        artist_name: str,
        album_title: str,
        track_title: str = "",
    ) -> str:
        """Return the album path (``/library/metadata/<id>``) for a refresh.

        The album search (type 9) is tried first; when it yields nothing the
        track search (type 10) is used, which also finds singles.
        """

        wanted_artist = canon(artist_name)
        wanted_album = canon(album_title)

        albums = self._get_container(
            f"/library/sections/{section_id}/all",
            {"type": ALBUM_TYPE, "title": album_title, "artist.title": artist_name},
        )
        for directory in albums.directories:
            if directory.type != "album":
                continue
            if canon(directory.title) == wanted_album and canon(directory.parent_title) == wanted_artist:
                return normalize_album_key(directory.key)

        params = {"type": TRACK_TYPE, "artist.title": artist_name, "album.title": album_title}
        if track_title:
            params["title"] = track_title
        tracks = self._get_container(f"/library/sections/{section_id}/all", params)
        wanted_track = canon(track_title)
        for track in tracks.tracks:
            if canon(track.grandparent_title) != wanted_artist:
                continue
            if canon(track.parent_title) != wanted_album:
                continue
            if track_title and canon(track.title) != wanted_track:
                continue
            if track.parent_key:
                return normalize_album_key(track.parent_key)
            if track.parent_rating_key:
                return f"/library/metadata/{track.parent_rating_key}"

        raise PlexNotFoundError(
            f"album not found in section {section_id}: "
            + f"artist={artist_name!r} album={album_title!r} track={track_title!r}"
        )

    # Actions ------------------------------------------------------------------

    def refresh_album(self, album_key: str) -> None:
        """Ask Plex to refresh one album; GET first, PUT when GET is rejected."""

        path = f"{normalize_album_key(album_key)}/refresh"
        response = self._send("GET", path, {"force": "1"})
        if response.status in _REFRESH_OK:
            return
        if response.status in _REFRESH_RETRY_WITH_PUT:
            logger.debug("Plex refresh GET returned %s; retrying with PUT", response.status)
            retry = self._send("PUT", path, {"force": "1"})
            if retry.status in _REFRESH_OK:
                return
            raise PlexError(f"plex refresh (PUT) failed: {retry.status_text} {retry.text.strip()}")
        raise PlexError(f"plex refresh (GET) failed: {response.status_text} {response.text.strip()}")

    def health_check(self) -> bool:
        """Return ``True`` when ``/identity`` answers 200."""

        try:
            response = self._send("GET", "/identity", None)
        except PlexError as exc:
            logger.warning("Plex health check failed: %s", exc)
            return False
        if response.status != 200:
            logger.warning("Plex health check failed: %s", response.status_text)
            return False
        try:
            identity = parse_identity(response.text)
        except PlexPayloadError as exc:
            logger.warning("Plex reachable but identity could not be parsed: %s", exc)
            return True
        logger.debug("Plex reachable: %s %s", identity.friendly_name, identity.version)
        return True

    # Transport ----------------------------------------------------------------

    def _get_container(self, path: str, params: Mapping[str, str] | None) -> PlexMediaContainer:
        response = self._send("GET", path, params)
        if response.status != 200:
            raise PlexError(f"plex {path} -> {response.status_text}: {response.text.strip()}")
        try:
            return parse_media_container(response.text)
        except PlexPayloadError as exc:
            raise PlexError(f"plex {path}: {exc}") from exc

    def _send(self, method: str, path: str, params: Mapping[str, str] | None) -> HTTPResponse:
        query = dict(params or {})
        query["X-Plex-Token"] = self._token
        logger.debug("Plex %s %s", method, path)
        try:
            return self._http.request(
                method,
                f"{self.base_url}{path}",
                params=query,
                headers={"Accept": "application/xml"},
                timeout=self.timeout,
            )
        except HTTPError as exc:
            raise PlexError(f"plex {method} {path}: {exc}") from exc


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "PlexClient", "PlexError", "PlexNotFoundError"]
