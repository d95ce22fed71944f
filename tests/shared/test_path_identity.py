"""
Summary: Tests for deriving artist/album/medium/file identity from paths.
Why: Inventory fallback matching breaks silently if segments are misread.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from mbtagsync.shared.errors import ResolutionError
from mbtagsync.shared.path_identity import PathIdentity, derive_path_identity

ROOT = Path("/srv/music")


def test_three_segments_have_no_medium() -> None:
    identity = derive_path_identity(ROOT, ROOT / "Band" / "Album" / "01 Song.flac")

    assert identity == PathIdentity(artist="Band", album="Album", file_name="01 Song.flac")


def test_four_segments_include_medium() -> None:
    identity = derive_path_identity(ROOT, ROOT / "Band" / "Album" / "CD2" / "03 Song.mp3")

    assert identity.medium == "CD2"
    assert identity.file_name == "03 Song.mp3"


def test_segments_are_nfc_normalized() -> None:
    identity = derive_path_identity(ROOT, ROOT / "Beyonce\u0301" / "Album" / "01.flac")

    assert identity.artist == "Beyonc\u00e9"


def test_trailing_separator_on_root_is_ignored() -> None:
    identity = derive_path_identity("/srv/music/", "/srv/music/Band/Album/01.flac")

    assert identity.album == "Album"


@pytest.mark.parametrize(
    "file_path",
    [
        ROOT,
        Path("/elsewhere/Band/Album/01.flac"),
        ROOT / "Band" / "01.flac",
        ROOT / "Band" / "Album" / "README",
    ],
    ids=["root-itself", "outside-root", "too-short", "no-extension"],
)
def test_invalid_paths_raise(file_path: Path) -> None:
    with pytest.raises(ResolutionError) as excinfo:
        _ = derive_path_identity(ROOT, file_path)

    assert excinfo.value.step == "path identity"
