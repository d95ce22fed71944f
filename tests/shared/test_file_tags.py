from __future__ import annotations

from mbtagsync.shared.errors import ResolutionError, TaggingError, TrackNotFoundError
from mbtagsync.shared.file_tags import ReleaseIdentifiers, TagChangeSet


def test_release_identifiers_require_both_ids() -> None:
    assert ReleaseIdentifiers("rel-1", "trk-1").resolvable
    assert not ReleaseIdentifiers("rel-1", " ").resolvable
    assert not ReleaseIdentifiers().resolvable


def test_change_set_is_a_read_only_mapping() -> None:
    change_set = TagChangeSet({"TITLE": "Song"}, desired={"TITLE": "Song", "ALBUM": "Album"})

    assert dict(change_set) == {"TITLE": "Song"}
    assert "ALBUM" not in change_set
    assert change_set.desired["ALBUM"] == "Album"
    assert not TagChangeSet()


def test_error_kinds_are_distinct() -> None:
    error = ResolutionError("track file", "no match")

    assert isinstance(error, TaggingError)
    assert str(error) == "track file: no match"
    assert ResolutionError.kind != TrackNotFoundError.kind
