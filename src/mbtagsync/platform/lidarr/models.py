"""Where: src/mbtagsync/platform/lidarr/models.py
What: Typed records for the Lidarr v1 payloads used during identifier recovery.
Why: Keep JSON shape checks next to the wire format, away from matching logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self, cast


class LidarrPayloadError(ValueError):
    """Raised when a Lidarr response does not match the expected shape."""


@dataclass(frozen=True, slots=True)
class LidarrArtist:
    id: int
    name: str
    path: str

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        item = _mapping(data, "artist")
        return cls(
            id=_int(item, "id", "artist"),
            name=_str(item, "artistName"),
            path=_str(item, "path"),
        )

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "artistName": self.name, "path": self.path}


@dataclass(frozen=True, slots=True)
class LidarrTrackFile:
    id: int
    path: str
    album_id: int
    artist_id: int

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        item = _mapping(data, "trackfile")
        return cls(
            id=_int(item, "id", "trackfile"),
            path=_str(item, "path"),
            album_id=_int(item, "albumId", "trackfile"),
            artist_id=_int(item, "artistId", "trackfile"),
        )


@dataclass(frozen=True, slots=True)
class LidarrTrack:
    id: int
    title: str
    foreign_track_id: str
    track_file_id: int

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        item = _mapping(data, "track")
        return cls(
            id=_int(item, "id", "track"),
            title=_str(item, "title"),
            foreign_track_id=_str(item, "foreignTrackId"),
            track_file_id=_int(item, "trackFileId", "track", default=0),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "foreignTrackId": self.foreign_track_id,
            "trackFileId": self.track_file_id,
        }


@dataclass(frozen=True, slots=True)
class LidarrRelease:
    id: int
    monitored: bool
    foreign_release_id: str


@dataclass(frozen=True, slots=True)
class LidarrAlbum:
    id: int
    artist_id: int
    releases: tuple[LidarrRelease, ...]

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        item = _mapping(data, "album")
        releases_raw = item.get("releases") or []
        if not isinstance(releases_raw, list):
            raise LidarrPayloadError("album.releases must be a list")
        releases: list[LidarrRelease] = []
        for raw in cast(list[Any], releases_raw):
            release = _mapping(raw, "release")
            releases.append(
                LidarrRelease(
                    id=_int(release, "id", "release", default=0),
                    monitored=bool(release.get("monitored", False)),
                    foreign_release_id=_str(release, "foreignReleaseId"),
                )
            )
        return cls(
            id=_int(item, "id", "album"),
            artist_id=_int(item, "artistId", "album", default=0),
            releases=tuple(releases),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "artistId": self.artist_id,
            "releases": [
                {
                    "id": release.id,
                    "monitored": release.monitored,
                    "foreignReleaseId": release.foreign_release_id,
                }
                for release in self.releases
            ],
        }

    def monitored_release_id(self) -> str:
        """Return the first monitored release's MusicBrainz id, or ``""``."""

        for release in self.releases:
            if release.monitored and release.foreign_release_id:
                return release.foreign_release_id
        return ""


def _mapping(value: Any, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise LidarrPayloadError(f"{context} entry must be a JSON object")
    return cast(dict[str, Any], value)


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _int(data: dict[str, Any], key: str, context: str, *, default: int | None = None) -> int:
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if value is None and default is not None:
        return default
    raise LidarrPayloadError(f"{context}.{key} must be an integer")


__all__ = [
    "LidarrAlbum",
    "LidarrArtist",
    "LidarrPayloadError",
    "LidarrRelease",
    "LidarrTrack",
    "LidarrTrackFile",
]
