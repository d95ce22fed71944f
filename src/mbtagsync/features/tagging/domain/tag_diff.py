"""Where: src/mbtagsync/features/tagging/domain/tag_diff.py
What: Compute the minimal set of tag keys whose value must change.
Why: Writers touch only keys that differ, so an up-to-date file sees no I/O.

Desired values that are empty are never asserted: they are neither written
nor counted as differences, which keeps data the catalog lacks intact.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mbtagsync.shared.canonical import canonicalize_values, normalize_tag_value
from mbtagsync.shared.file_tags import TagChangeSet


def diff(existing: Mapping[str, Sequence[str]], desired: Mapping[str, str]) -> TagChangeSet:
    """Return the keys of ``desired`` whose value differs from ``existing``.

    Args:
        existing: Current multi-valued tags keyed by upper-cased name.
        desired: Target single values keyed by upper-cased name.

    Returns:
        TagChangeSet mapping each changed key to its normalised new value;
        ``desired`` on the result keeps the full non-empty desired map.
    """

    changes: dict[str, str] = {}
    asserted: dict[str, str] = {}
    for key, value in desired.items():
        want = normalize_tag_value(value or "")
        if not want:
            continue
        asserted[key] = want
        have = canonicalize_values(existing.get(key))
        if want != have:
            changes[key] = want
    return TagChangeSet(changes, asserted)


__all__ = ["diff"]
