"""
Summary: Tests for tag value normalisation and multi-value fingerprints.
Why: Diffing and cross-service matching depend on stable canonical forms.
"""

from __future__ import annotations

import itertools

from mbtagsync.shared.canonical import (
    FINGERPRINT_SEPARATOR,
    canon,
    canonicalize_values,
    last_segment,
    normalize_tag_value,
    parent_segment,
)


def test_normalize_tag_value_trims_and_composes() -> None:
    assert normalize_tag_value("  Cafe\u0301 ") == "Caf\u00e9"


def test_canon_lowercases() -> None:
    assert canon(" The BAND ") == "the band"


def test_canonicalize_values_is_order_insensitive() -> None:
    values = ["Rock", "Pop", "Jazz"]
    fingerprints = {canonicalize_values(list(order)) for order in itertools.permutations(values)}

    assert fingerprints == {FINGERPRINT_SEPARATOR.join(["Jazz", "Pop", "Rock"])}


def test_canonicalize_values_drops_empty_and_case_duplicates() -> None:
    assert canonicalize_values(["Rock", " ", "rock", "ROCK "]) == "Rock"
    assert canonicalize_values([]) == ""
    assert canonicalize_values(None) == ""


def test_path_segments_handle_both_separators() -> None:
    assert last_segment("/data/music/Band/") == "Band"
    assert last_segment("C:\\Music\\Band\\01.flac") == "01.flac"
    assert parent_segment("/data/music/Band/Album/01.flac") == "Album"
    assert parent_segment("C:\\Music\\Band\\CD2\\01.flac") == "CD2"
