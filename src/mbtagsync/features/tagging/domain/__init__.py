"""Pure tagging rules: key vocabulary, diffing and catalog-to-tag derivation."""

from .release_tags import (
    ArtistCreditMode,
    ArtistCreditPolicy,
    build_file_tags,
    find_track,
    join_artist_credit,
    split_date,
)
from .tag_diff import diff
from .tag_keys import ID3_TAG_KEYS, VORBIS_TAG_KEYS, desired_tag_map

__all__ = [
    "ArtistCreditMode",
    "ArtistCreditPolicy",
    "ID3_TAG_KEYS",
    "VORBIS_TAG_KEYS",
    "build_file_tags",
    "desired_tag_map",
    "diff",
    "find_track",
    "join_artist_credit",
    "split_date",
]
