"""Where: src/mbtagsync/platform/musicbrainz/models.py
What: Typed view of a MusicBrainz WS2 release document.
Why: Decode the JSON payload once so tag derivation works on plain attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, cast


class CatalogFormatError(ValueError):
    """Raised when a release payload does not have the expected shape."""


@dataclass(frozen=True, slots=True)
class ArtistCredit:
    """One entry of an artist-credit list."""

    name: str
    join_phrase: str = ""
    artist_id: str = ""
    artist_name: str = ""


@dataclass(frozen=True, slots=True)
class Recording:
    """The performance a track references."""

    id: str = ""
    title: str = ""
    isrcs: tuple[str, ...] = ()
    first_release_date: str = ""


@dataclass(frozen=True, slots=True)
class CatalogTrack:
    """A track placed on one medium of a release."""

    id: str
    position: int
    number: str
    title: str
    artist_credit: tuple[ArtistCredit, ...] = ()
    recording: Recording = field(default_factory=Recording)


@dataclass(frozen=True, slots=True)
class Medium:
    """One disc or side of a release."""

    position: int
    tracks: tuple[CatalogTrack, ...]
    title: str = ""
    format: str = ""


@dataclass(frozen=True, slots=True)
class ReleaseGroup:
    """Release group carrying the first release date across editions."""

    id: str = ""
    title: str = ""
    first_release_date: str = ""


@dataclass(frozen=True, slots=True)
class Genre:
    """Community genre vote."""

    name: str
    count: int = 0


@dataclass(frozen=True, slots=True)
class CatalogRelease:
    """Authoritative release document for one release id."""

    id: str
    title: str
    date: str = ""
    artist_credit: tuple[ArtistCredit, ...] = ()
    release_group: ReleaseGroup = field(default_factory=ReleaseGroup)
    media: tuple[Medium, ...] = ()
    genres: tuple[Genre, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> CatalogRelease:
        """Decode a WS2 ``/release`` JSON document.

        Raises:
            CatalogFormatError: Required fields are missing or mistyped.
        """

        data = _mapping(payload, "release")
        release_id = _str(data, "id", "release", required=True)
        title = _str(data, "title", "release", required=True)

        group_raw = data.get("release-group")
        release_group = ReleaseGroup()
        if group_raw is not None:
            group = _mapping(group_raw, "release-group")
            release_group = ReleaseGroup(
                id=_str(group, "id", "release-group"),
                title=_str(group, "title", "release-group"),
                first_release_date=_str(group, "first-release-date", "release-group"),
            )

        media = tuple(
            _parse_medium(raw, index)
            for index, raw in enumerate(_list(data, "media", "release"), start=1)
        )

        genres: list[Genre] = []
        for raw in _list(data, "genres", "release"):
            genre = _mapping(raw, "genre")
            name = _str(genre, "name", "genre")
            if name:
                count = genre.get("count", 0)
                genres.append(Genre(name=name, count=count if isinstance(count, int) else 0))

        return cls(
            id=release_id,
            title=title,
            date=_str(data, "date", "release"),
            artist_credit=_parse_credits(data, "release"),
            release_group=release_group,
            media=media,
            genres=tuple(genres),
        )


def _parse_medium(raw: Any, index: int) -> Medium:
    medium = _mapping(raw, "medium")
    tracks = tuple(_parse_track(item) for item in _list(medium, "tracks", "medium"))
    position = medium.get("position", index)
    return Medium(
        position=position if isinstance(position, int) else index,
        tracks=tracks,
        title=_str(medium, "title", "medium"),
        format=_str(medium, "format", "medium"),
    )


def _parse_track(raw: Any) -> CatalogTrack:
    track = _mapping(raw, "track")
    position = track.get("position", 0)
    if isinstance(position, bool) or not isinstance(position, int):
        raise CatalogFormatError("track.position must be an integer")

    recording = Recording()
    recording_raw = track.get("recording")
    if recording_raw is not None:
        rec = _mapping(recording_raw, "recording")
        isrcs = tuple(
            str(code).strip()
            for code in _list(rec, "isrcs", "recording")
            if isinstance(code, str) and code.strip()
        )
        recording = Recording(
            id=_str(rec, "id", "recording"),
            title=_str(rec, "title", "recording"),
            isrcs=isrcs,
            first_release_date=_str(rec, "first-release-date", "recording"),
        )

    return CatalogTrack(
        id=_str(track, "id", "track", required=True),
        position=position,
        number=_str(track, "number", "track"),
        title=_str(track, "title", "track"),
        artist_credit=_parse_credits(track, "track"),
        recording=recording,
    )


def _parse_credits(data: dict[str, Any], context: str) -> tuple[ArtistCredit, ...]:
    credits: list[ArtistCredit] = []
    for raw in _list(data, "artist-credit", context):
        credit = _mapping(raw, "artist-credit")
        artist_raw = credit.get("artist") or {}
        artist = _mapping(artist_raw, "artist")
        credits.append(
            ArtistCredit(
                name=_str(credit, "name", "artist-credit") or _str(artist, "name", "artist"),
                join_phrase=_str(credit, "joinphrase", "artist-credit", strip=False),
                artist_id=_str(artist, "id", "artist"),
                artist_name=_str(artist, "name", "artist"),
            )
        )
    return tuple(credits)


def _mapping(value: Any, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CatalogFormatError(f"{context} must be a JSON object")
    return cast(dict[str, Any], value)


def _list(data: dict[str, Any], key: str, context: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise CatalogFormatError(f"{context}.{key} must be a list")
    return cast(list[Any], value)


def _str(
    data: dict[str, Any], key: str, context: str, *, required: bool = False, strip: bool = True
) -> str:
    value = data.get(key)
    if value is None:
        if required:
            raise CatalogFormatError(f"{context}.{key} is required")
        return ""
    if not isinstance(value, str):
        raise CatalogFormatError(f"{context}.{key} must be a string")
    return value.strip() if strip else value


__all__ = [
    "ArtistCredit",
    "CatalogFormatError",
    "CatalogRelease",
    "CatalogTrack",
    "Genre",
    "Medium",
    "Recording",
    "ReleaseGroup",
]
