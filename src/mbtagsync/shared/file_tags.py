# Where: mbtagsync.shared.file_tags
# What: Value objects exchanged between extraction, catalog and writing stages.
# Why: Keep one canonical representation of identifiers, desired tags and diffs.

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReleaseIdentifiers:
    """Catalog release id and release-track id for one file."""

    release_id: str = ""
    track_id: str = ""

    @property
    def resolvable(self) -> bool:
        return bool(self.release_id.strip() and self.track_id.strip())


@dataclass(slots=True)
class FileTags:
    """Desired tag values for one track.

    ``None`` or an empty string means "do not assert a value", never
    "clear the value".
    """

    artist: str | None = None
    album_artist: str | None = None
    genre: str | None = None
    release_date: str | None = None
    release_year: str | None = None
    original_date: str | None = None
    original_year: str | None = None
    album: str | None = None
    title: str | None = None
    isrc: str | None = None
    track_number: str | None = None
    track_total: str | None = None
    disc_number: str | None = None
    disc_total: str | None = None


class TagChangeSet(Mapping[str, str]):
    """Upper-cased tag keys whose desired value differs from the file.

    ``desired`` keeps the full desired map so writers can compose paired
    fields (``N/M`` track and disc values) even when only one half changed.
    """

    __slots__ = ("_changes", "desired")

    def __init__(
        self,
        changes: Mapping[str, str] | None = None,
        desired: Mapping[str, str] | None = None,
    ) -> None:
        self._changes: dict[str, str] = dict(changes or {})
        self.desired: dict[str, str] = dict(desired or {})

    def __getitem__(self, key: str) -> str:
        return self._changes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __repr__(self) -> str:
        return f"TagChangeSet({self._changes!r})"


__all__ = ["FileTags", "ReleaseIdentifiers", "TagChangeSet"]
