"""Where: src/mbtagsync/features/tagging/usecases/inventory_resolver.py
What: Recover MusicBrainz release and track ids for a file from Lidarr.
Why: Untagged files can still be matched through the artist/album/file layout
     that Lidarr itself maintains.

Resolution runs four lookups in order (artist, track file, track, album) and
stops at the first miss with a ``ResolutionError`` naming the failing step.
Artist, track and album lists are cached; the track file list is always
fetched fresh because it changes whenever files are imported.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, Final, TypeVar, cast

from mbtagsync.platform.cache import TTLCacheStore
from mbtagsync.platform.lidarr import (
    LidarrAlbum,
    LidarrArtist,
    LidarrClient,
    LidarrError,
    LidarrPayloadError,
    LidarrTrack,
    LidarrTrackFile,
)
from mbtagsync.platform.logging import logger
from mbtagsync.shared.canonical import canon, last_segment, parent_segment
from mbtagsync.shared.errors import ResolutionError
from mbtagsync.shared.file_tags import ReleaseIdentifiers
from mbtagsync.shared.path_identity import PathIdentity, derive_path_identity

STEP_ARTIST: Final[str] = "artist"
STEP_TRACK_FILE: Final[str] = "track file"
STEP_TRACK: Final[str] = "track"
STEP_RELEASE: Final[str] = "release"

_T = TypeVar("_T")


class InventoryResolver:
    """Match a file path against the Lidarr inventory."""

    def __init__(
        self,
        client: LidarrClient,
        *,
        artist_cache: TTLCacheStore,
        track_cache: TTLCacheStore,
        album_cache: TTLCacheStore,
    ) -> None:
        self._client: LidarrClient = client
        self._artist_cache: TTLCacheStore = artist_cache
        self._track_cache: TTLCacheStore = track_cache
        self._album_cache: TTLCacheStore = album_cache

    def resolve(self, file_path: Path, library_root: Path) -> ReleaseIdentifiers:
        """Return the ids Lidarr holds for ``file_path``.

        Raises:
            ResolutionError: Any step failed; ``step`` names which one.
        """

        identity = derive_path_identity(library_root, file_path)
        artist = self.resolve_artist(identity.artist)
        track_file = self.resolve_track_file(artist, identity)
        track_id = self.resolve_track_id(artist, track_file)
        release_id = self.resolve_release_id(artist, track_file)
        logger.debug(
            "Resolved %s via Lidarr: release=%s track=%s", file_path, release_id, track_id
        )
        return ReleaseIdentifiers(release_id=release_id, track_id=track_id)

    def resolve_artist(self, folder_name: str) -> LidarrArtist:
        cached = self._artist_cache.get(folder_name)
        if cached.fresh:
            return _decode(STEP_ARTIST, LidarrArtist.from_payload, cached.value)

        artists = self._call(STEP_ARTIST, self._client.list_artists)
        wanted = canon(folder_name)
        for artist in artists:
            if artist.path and canon(last_segment(artist.path)) == wanted:
                self._artist_cache.put(folder_name, artist.to_payload())
                return artist
        raise ResolutionError(STEP_ARTIST, f"no Lidarr artist with folder {folder_name!r}")

    def resolve_track_file(self, artist: LidarrArtist, identity: PathIdentity) -> LidarrTrackFile:
        track_files = self._call(STEP_TRACK_FILE, lambda: self._client.list_track_files(artist.id))
        wanted_parent = canon(identity.medium or identity.album)
        wanted_name = canon(identity.file_name)
        for track_file in track_files:
            if not track_file.path:
                continue
            if (
                canon(parent_segment(track_file.path)) == wanted_parent
                and canon(last_segment(track_file.path)) == wanted_name
            ):
                return track_file
        raise ResolutionError(
            STEP_TRACK_FILE,
            f"no track file matching {identity.medium or identity.album}/{identity.file_name} "
            + f"for artist {artist.name!r}",
        )

    def resolve_track_id(self, artist: LidarrArtist, track_file: LidarrTrackFile) -> str:
        key = str(track_file.album_id)
        cached = self._track_cache.get(key)
        if cached.fresh:
            tracks = _decode_list(STEP_TRACK, LidarrTrack.from_payload, cached.value)
        else:
            tracks = self._call(
                STEP_TRACK, lambda: self._client.list_tracks(artist.id, track_file.album_id)
            )
            self._track_cache.put(key, [track.to_payload() for track in tracks])

        for track in tracks:
            if track.track_file_id == track_file.id and track.foreign_track_id:
                return track.foreign_track_id
        raise ResolutionError(STEP_TRACK, f"no track references track file {track_file.id}")

    def resolve_release_id(self, artist: LidarrArtist, track_file: LidarrTrackFile) -> str:
        key = str(track_file.album_id)
        cached = self._album_cache.get(key)
        if cached.fresh:
            albums = _decode_list(STEP_RELEASE, LidarrAlbum.from_payload, cached.value)
        else:
            albums = self._call(
                STEP_RELEASE, lambda: self._client.list_albums(artist.id, track_file.album_id)
            )
            self._album_cache.put(key, [album.to_payload() for album in albums])

        for album in albums:
            if album.id != track_file.album_id:
                continue
            release_id = album.monitored_release_id()
            if release_id:
                return release_id
            raise ResolutionError(
                STEP_RELEASE, f"no monitored release with a MusicBrainz id for album {album.id}"
            )
        raise ResolutionError(STEP_RELEASE, f"album {track_file.album_id} not returned by Lidarr")

    @staticmethod
    def _call(step: str, fetch: Callable[[], _T]) -> _T:
        try:
            return fetch()
        except LidarrError as exc:
            raise ResolutionError(step, str(exc)) from exc


def _decode(step: str, decode: Callable[[Any], _T], value: Any) -> _T:
    try:
        return decode(value)
    except LidarrPayloadError as exc:
        raise ResolutionError(step, f"corrupt cache entry: {exc}") from exc


def _decode_list(step: str, decode: Callable[[Any], _T], value: Any) -> list[_T]:
    if not isinstance(value, list):
        raise ResolutionError(step, "corrupt cache entry: expected a list")
    return [_decode(step, decode, item) for item in cast(list[Any], value)]


__all__ = [
    "InventoryResolver",
    "STEP_ARTIST",
    "STEP_RELEASE",
    "STEP_TRACK",
    "STEP_TRACK_FILE",
]
