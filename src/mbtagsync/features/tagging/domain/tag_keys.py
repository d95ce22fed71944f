"""
Summary: Map ``FileTags`` onto the upper-cased tag keys each container uses.
Why: The diff engine and both writers must agree on one key vocabulary.
"""

from __future__ import annotations

from typing import Final

from mbtagsync.shared.file_tags import FileTags

# (tag key, FileTags attribute) in write order.
_COMMON_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("ARTIST", "artist"),
    ("ALBUMARTIST", "album_artist"),
    ("GENRE", "genre"),
    ("DATE", "release_date"),
    ("YEAR", "release_year"),
    ("ORIGINALDATE", "original_date"),
    ("ORIGINALYEAR", "original_year"),
    ("ALBUM", "album"),
    ("TITLE", "title"),
    ("TRACKNUMBER", "track_number"),
    ("TRACKTOTAL", "track_total"),
    ("DISCNUMBER", "disc_number"),
    ("DISCTOTAL", "disc_total"),
    ("ISRC", "isrc"),
)

VORBIS_TAG_KEYS: Final[tuple[str, ...]] = (*(key for key, _ in _COMMON_FIELDS), "RELEASEDATE")
ID3_TAG_KEYS: Final[tuple[str, ...]] = tuple(key for key, _ in _COMMON_FIELDS)


def desired_tag_map(tags: FileTags, *, include_release_date: bool = False) -> dict[str, str]:
    """Return every known key with its desired value (``""`` when unset).

    ``include_release_date`` adds ``RELEASEDATE`` mirroring ``DATE``; only
    Vorbis comments carry it.
    """

    desired = {key: (getattr(tags, attr) or "") for key, attr in _COMMON_FIELDS}
    if include_release_date:
        desired["RELEASEDATE"] = tags.release_date or ""
    return desired


__all__ = ["ID3_TAG_KEYS", "VORBIS_TAG_KEYS", "desired_tag_map"]
