"""Shared pytest fixtures: a two-medium MusicBrainz release document."""

from __future__ import annotations

from typing import Any

import pytest


def _track(medium: int, position: int, **overrides: Any) -> dict[str, Any]:
    track: dict[str, Any] = {
        "id": f"t{medium}-{position}",
        "position": position,
        "number": str(position),
        "title": f"Song {medium}.{position}",
        "artist-credit": [],
        "recording": {
            "id": f"rec-{medium}-{position}",
            "title": f"Song {medium}.{position}",
            "isrcs": [],
        },
    }
    track.update(overrides)
    return track


@pytest.fixture
def release_payload() -> dict[str, Any]:
    """Release ``rel-1``: disc 1 has five tracks, disc 2 has seven.

    Track ``t2-3`` is the third track of disc 2 and carries an ISRC.
    """

    disc_two = [_track(2, position) for position in range(1, 8)]
    disc_two[2] = _track(
        2,
        3,
        title="Third Song",
        recording={
            "id": "rec-2-3",
            "title": "Third Song",
            "isrcs": ["USAAA2000003", "USAAA2000099"],
        },
    )
    return {
        "id": "rel-1",
        "title": "Album Title",
        "date": "2020-05-01",
        "artist-credit": [
            {"name": "Band", "joinphrase": " feat. ", "artist": {"id": "art-1", "name": "The Band"}},
            {"name": "Singer", "joinphrase": "", "artist": {"id": "art-2", "name": "Singer"}},
        ],
        "release-group": {
            "id": "rg-1",
            "title": "Album Title",
            "first-release-date": "2019-11-20",
        },
        "genres": [{"name": "rock", "count": 3}, {"name": "pop", "count": 5}],
        "media": [
            {"position": 1, "format": "CD", "tracks": [_track(1, position) for position in range(1, 6)]},
            {"position": 2, "format": "CD", "tracks": disc_two},
        ],
    }
