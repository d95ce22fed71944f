"""
Summary: Ports defining tagging use case dependencies.
Why: Decouple the track processor from concrete services so tests can use fakes.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from mbtagsync.platform.musicbrainz.models import CatalogRelease
from mbtagsync.shared.file_tags import FileTags, ReleaseIdentifiers, TagChangeSet

from .processing_types import RefreshSet, WriteResult


@runtime_checkable
class IdentifierSourcePort(Protocol):
    """Port for reading identifiers embedded in a file."""

    def extract_identifiers(self, file_path: Path) -> ReleaseIdentifiers:
        """Return embedded release and track ids; empty strings when absent."""
        ...


@runtime_checkable
class IdentifierResolverPort(Protocol):
    """Port for recovering identifiers from an inventory service."""

    def resolve(self, file_path: Path, library_root: Path) -> ReleaseIdentifiers:
        """Match the file against the inventory by its path."""
        ...


@runtime_checkable
class ReleaseCatalogPort(Protocol):
    """Port for fetching authoritative release documents."""

    def fetch_release(self, release_id: str) -> CatalogRelease:
        """Return the release document for ``release_id``."""
        ...


@runtime_checkable
class TagWriterPort(Protocol):
    """Port for diffing and writing tags on one file."""

    def plan(self, file_path: Path, tags: FileTags) -> TagChangeSet:
        """Return the keys that must change for ``file_path`` to match ``tags``."""
        ...

    def write(self, file_path: Path, change_set: TagChangeSet) -> WriteResult:
        """Apply ``change_set``; an empty set performs no I/O."""
        ...


@runtime_checkable
class RefreshNotifierPort(Protocol):
    """Port for queueing media-index refreshes."""

    def note_change(
        self,
        album_title: str,
        release_artist: str,
        track_title: str,
        unchanged: bool,
        tags_written: int,
        refresh_set: RefreshSet,
    ) -> RefreshSet:
        """Add the changed album to ``refresh_set`` and return it."""
        ...


class TagFormatAdapter(Protocol):
    """Container-specific tag reading and writing."""

    def read_existing(self, file_path: Path) -> Mapping[str, list[str]]:
        """Return current tags keyed by upper-cased name."""
        ...

    def desired_map(self, tags: FileTags) -> dict[str, str]:
        """Return the keys this container carries with their desired values."""
        ...

    def apply(self, file_path: Path, change_set: TagChangeSet) -> int:
        """Write ``change_set`` and return the number of tags written."""
        ...


__all__ = [
    "IdentifierResolverPort",
    "IdentifierSourcePort",
    "RefreshNotifierPort",
    "ReleaseCatalogPort",
    "TagFormatAdapter",
    "TagWriterPort",
]
