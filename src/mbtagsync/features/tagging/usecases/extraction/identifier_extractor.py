"""Embedded MusicBrainz identifier extraction.

Where: src/mbtagsync/features/tagging/usecases/extraction/identifier_extractor.py
What: Read MusicBrainz ids from Vorbis comments (FLAC) and ID3 TXXX frames (MP3).
Why: Files tagged by Picard or Lidarr already carry the release and track ids,
     which makes inventory lookups unnecessary.

A missing tag is not an error: readers return ``""``. Only container or
parse failures raise ``TagReadError``.
"""

from __future__ import annotations

import abc
from enum import StrEnum
from pathlib import Path
from typing import ClassVar, Final, override

from mutagen._util import MutagenError
from mutagen.flac import FLAC
from mutagen.id3 import ID3, ID3NoHeaderError

from mbtagsync.platform.logging import logger
from mbtagsync.shared.errors import TagReadError, UnsupportedFormatError
from mbtagsync.shared.file_tags import ReleaseIdentifiers


class IdKind(StrEnum):
    """Kinds of MusicBrainz identifiers a file may embed."""

    RELEASE = "release"
    TRACK = "track"
    RECORDING = "recording"
    RELEASE_GROUP = "release-group"
    ARTIST = "artist"


VORBIS_ID_KEYS: Final[dict[IdKind, str]] = {
    IdKind.RELEASE: "MUSICBRAINZ_ALBUMID",
    IdKind.TRACK: "MUSICBRAINZ_RELEASETRACKID",
    IdKind.RECORDING: "MUSICBRAINZ_TRACKID",
    IdKind.RELEASE_GROUP: "MUSICBRAINZ_RELEASEGROUPID",
    IdKind.ARTIST: "MUSICBRAINZ_ALBUMARTISTID",
}

# TXXX descriptions, compared case-insensitively after trimming.
ID3_ID_LABELS: Final[dict[IdKind, tuple[str, ...]]] = {
    IdKind.RELEASE: ("MusicBrainz Album Id", "MusicBrainz Release Id"),
    IdKind.TRACK: ("MusicBrainz Release Track Id",),
    IdKind.RECORDING: ("MusicBrainz Track Id",),
    IdKind.RELEASE_GROUP: ("MusicBrainz Release Group Id",),
    IdKind.ARTIST: ("MusicBrainz Album Artist Id",),
}


class IdentifierReader(abc.ABC):
    """Read one identifier kind from a single container format."""

    @abc.abstractmethod
    def read(self, file_path: Path, kind: IdKind) -> str:
        """Return the identifier or ``""`` when the tag is absent."""
        raise NotImplementedError


class FlacIdentifierReader(IdentifierReader):
    """Vorbis comment lookup; the first non-empty value wins."""

    @override
    def read(self, file_path: Path, kind: IdKind) -> str:
        key = VORBIS_ID_KEYS[kind]
        try:
            audio = FLAC(file_path)
        except (MutagenError, OSError) as exc:
            raise TagReadError(f"failed to read FLAC tags from {file_path}: {exc}") from exc

        tags = audio.tags
        if tags is None:
            return ""
        values: list[str] = tags.get(key) or []
        for value in values:
            stripped = str(value).strip()
            if stripped:
                return stripped
        return ""


class Id3IdentifierReader(IdentifierReader):
    """User-defined text frame lookup matched by description."""

    @override
    def read(self, file_path: Path, kind: IdKind) -> str:
        wanted = {label.strip().lower() for label in ID3_ID_LABELS[kind]}
        try:
            tags = ID3(file_path)
        except ID3NoHeaderError:
            return ""
        except (MutagenError, OSError) as exc:
            raise TagReadError(f"failed to read ID3 tags from {file_path}: {exc}") from exc

        for frame in tags.getall("TXXX"):
            description = str(getattr(frame, "desc", "")).strip().lower()
            if description not in wanted:
                continue
            for value in getattr(frame, "text", []):
                stripped = str(value).strip()
                if stripped:
                    return stripped
        return ""


class IdentifierExtractor:
    """Facade choosing the reader by file extension."""

    _format_map: ClassVar[dict[str, IdentifierReader]] = {
        ".flac": FlacIdentifierReader(),
        ".mp3": Id3IdentifierReader(),
    }

    def extract(self, file_path: Path, kind: IdKind) -> str:
        """Return the ``kind`` identifier embedded in ``file_path``.

        Raises:
            UnsupportedFormatError: No reader handles the file extension.
            TagReadError: The tag container could not be parsed.
        """

        reader = self._format_map.get(file_path.suffix.lower())
        if reader is None:
            raise UnsupportedFormatError(f"unsupported file format: {file_path.suffix or file_path.name}")
        value = reader.read(file_path, kind)
        logger.debug("Extracted %s id %r from %s", kind.value, value, file_path)
        return value

    def extract_identifiers(self, file_path: Path) -> ReleaseIdentifiers:
        """Read the release id and release-track id together."""

        return ReleaseIdentifiers(
            release_id=self.extract(file_path, IdKind.RELEASE),
            track_id=self.extract(file_path, IdKind.TRACK),
        )


__all__ = [
    "FlacIdentifierReader",
    "ID3_ID_LABELS",
    "IdKind",
    "IdentifierExtractor",
    "IdentifierReader",
    "Id3IdentifierReader",
    "VORBIS_ID_KEYS",
]
