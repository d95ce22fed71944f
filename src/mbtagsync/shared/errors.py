"""
Summary: Exception hierarchy for tag resolution and reconciliation failures.
Why: Let the track processor and scanner tell fatal per-file failures from warnings by type.
"""

from __future__ import annotations

from typing import ClassVar


class TaggingError(Exception):
    """Base class for every failure raised while tagging one file."""

    kind: ClassVar[str] = "tagging-error"


class UnsupportedFormatError(TaggingError):
    """The file extension is not handled by any tag format."""

    kind: ClassVar[str] = "unsupported-format"


class TagReadError(TaggingError):
    """The tag container could not be read or parsed."""

    kind: ClassVar[str] = "tag-read-failure"


class IdentifiersUnavailableError(TaggingError):
    """Neither embedded nor resolved catalog identifiers are available."""

    kind: ClassVar[str] = "identifiers-unavailable"


class ResolutionError(TaggingError):
    """An inventory resolution step did not yield a match."""

    kind: ClassVar[str] = "resolution-failure"

    def __init__(self, step: str, message: str) -> None:
        super().__init__(f"{step}: {message}")
        self.step: str = step


class CatalogFetchError(TaggingError):
    """The catalog release document could not be fetched or decoded."""

    kind: ClassVar[str] = "catalog-fetch-failure"


class TrackNotFoundError(TaggingError):
    """The catalog release does not contain the expected track."""

    kind: ClassVar[str] = "track-not-found"


class TagWriteError(TaggingError):
    """A tag-editing subprocess or the final file replacement failed."""

    kind: ClassVar[str] = "tag-write-failure"


class RefreshResolutionError(TaggingError):
    """The media-index album could not be resolved; reported as a warning."""

    kind: ClassVar[str] = "refresh-resolution-failure"


__all__ = [
    "CatalogFetchError",
    "IdentifiersUnavailableError",
    "RefreshResolutionError",
    "ResolutionError",
    "TagReadError",
    "TagWriteError",
    "TaggingError",
    "TrackNotFoundError",
    "UnsupportedFormatError",
]
