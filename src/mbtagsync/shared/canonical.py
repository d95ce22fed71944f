"""Where: src/mbtagsync/shared/canonical.py
What: Pure normalisation helpers for tag values and human-readable names.
Why: Tag diffing and cross-service matching must compare strings the same way.
"""

from __future__ import annotations

import posixpath
import unicodedata
from collections.abc import Iterable
from typing import Final

# Unit separator: never present in tag content, used only for comparison.
FINGERPRINT_SEPARATOR: Final[str] = "\x1f"


def normalize_tag_value(value: str) -> str:
    """Trim and NFC-normalise a tag value."""

    return unicodedata.normalize("NFC", value.strip())


def canon(value: str) -> str:
    """Canonicalise a name for matching: NFC, trimmed and lower-cased."""

    return normalize_tag_value(value).lower()


def canonicalize_values(values: Iterable[str] | None) -> str:
    """Return an order-insensitive fingerprint of a multi-valued tag.

    Values are normalised, empty ones dropped, de-duplicated
    case-insensitively (first spelling wins), sorted and joined.
    """

    if not values:
        return ""
    kept: list[str] = []
    seen: set[str] = set()
    for raw in values:
        normalized = normalize_tag_value(raw)
        if not normalized:
            continue
        folded = normalized.lower()
        if folded in seen:
            continue
        seen.add(folded)
        kept.append(normalized)
    kept.sort()
    return FINGERPRINT_SEPARATOR.join(kept)


def _to_posix(path: str) -> str:
    return path.replace("\\", "/").rstrip("/")


def last_segment(path: str) -> str:
    """Return the final segment of a POSIX or Windows style path."""

    return posixpath.basename(_to_posix(path))


def parent_segment(path: str) -> str:
    """Return the name of the directory containing ``path``."""

    return posixpath.basename(posixpath.dirname(_to_posix(path)))


__all__ = [
    "FINGERPRINT_SEPARATOR",
    "canon",
    "canonicalize_values",
    "last_segment",
    "normalize_tag_value",
    "parent_segment",
]
