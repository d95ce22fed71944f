"""Identifier extraction from embedded tags.

Exports the ``IdentifierExtractor`` facade and the per-format readers.
"""

from .identifier_extractor import (
    ID3_ID_LABELS,
    VORBIS_ID_KEYS,
    FlacIdentifierReader,
    IdentifierExtractor,
    IdentifierReader,
    Id3IdentifierReader,
    IdKind,
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
