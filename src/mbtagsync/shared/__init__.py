"""
Summary: Shared value objects, canonicalisation helpers and error taxonomy.
Why: Provide dependency-free building blocks used by every layer.
"""

from .canonical import canon, canonicalize_values, normalize_tag_value
from .errors import (
    CatalogFetchError,
    IdentifiersUnavailableError,
    RefreshResolutionError,
    ResolutionError,
    TagReadError,
    TagWriteError,
    TaggingError,
    TrackNotFoundError,
    UnsupportedFormatError,
)
from .file_tags import FileTags, ReleaseIdentifiers, TagChangeSet
from .path_identity import PathIdentity, derive_path_identity

__all__ = [
    "CatalogFetchError",
    "FileTags",
    "IdentifiersUnavailableError",
    "PathIdentity",
    "RefreshResolutionError",
    "ReleaseIdentifiers",
    "ResolutionError",
    "TagChangeSet",
    "TagReadError",
    "TagWriteError",
    "TaggingError",
    "TrackNotFoundError",
    "UnsupportedFormatError",
    "canon",
    "canonicalize_values",
    "derive_path_identity",
    "normalize_tag_value",
]
