"""Tests for deriving desired tags from a catalog release."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from mbtagsync.features.tagging.domain import (
    ArtistCreditMode,
    ArtistCreditPolicy,
    build_file_tags,
    desired_tag_map,
    find_track,
    join_artist_credit,
    split_date,
)
from mbtagsync.features.tagging.domain.release_tags import top_genre
from mbtagsync.platform.musicbrainz.models import ArtistCredit, CatalogRelease
from mbtagsync.shared.errors import TrackNotFoundError


@pytest.fixture
def release(release_payload: dict[str, Any]) -> CatalogRelease:
    return CatalogRelease.from_payload(release_payload)


def test_second_medium_track_numbering(release: CatalogRelease) -> None:
    tags = build_file_tags(release, "t2-3")

    assert tags.track_number == "3"
    assert tags.track_total == "7"
    assert tags.disc_number == "2"
    assert tags.disc_total == "2"


def test_first_medium_uses_its_own_track_total(release: CatalogRelease) -> None:
    tags = build_file_tags(release, "t1-5")

    assert (tags.track_number, tags.track_total, tags.disc_number) == ("5", "5", "1")


def test_release_level_fields(release: CatalogRelease) -> None:
    tags = build_file_tags(release, "t2-3")

    assert tags.artist == "Band feat. Singer"
    assert tags.album_artist == "Band"
    assert tags.album == "Album Title"
    assert tags.title == "Third Song"
    assert tags.isrc == "USAAA2000003"
    assert (tags.release_date, tags.release_year) == ("2020-05-01", "2020")
    assert (tags.original_date, tags.original_year) == ("2019-11-20", "2019")
    assert tags.genre == ""


def test_genre_is_written_only_when_enabled(release: CatalogRelease) -> None:
    assert build_file_tags(release, "t2-3", write_genre=True).genre == "pop"
    assert top_genre(release) == "pop"


def test_track_credit_overrides_release_credit(release_payload: dict[str, Any]) -> None:
    payload = copy.deepcopy(release_payload)
    payload["media"][0]["tracks"][0]["artist-credit"] = [
        {"name": "Guest", "joinphrase": "", "artist": {"id": "art-9", "name": "Guest Artist"}}
    ]

    tags = build_file_tags(CatalogRelease.from_payload(payload), "t1-1")

    assert tags.artist == "Guest"
    assert tags.album_artist == "Band"


def test_canonical_credit_policy(release: CatalogRelease) -> None:
    policy = ArtistCreditPolicy(mode=ArtistCreditMode.CANONICAL)

    tags = build_file_tags(release, "t2-3", policy=policy)

    assert tags.artist == "The Band feat. Singer"
    assert tags.album_artist == "The Band"


def test_join_artist_credit_with_delimiter() -> None:
    credits = (
        ArtistCredit(name="A", join_phrase=" & "),
        ArtistCredit(name="B", join_phrase=" feat. "),
        ArtistCredit(name="C"),
    )

    assert join_artist_credit(credits) == "A & B feat. C"
    assert join_artist_credit(credits, ArtistCreditPolicy(delimiter="; ")) == "A; B; C"
    assert join_artist_credit(()) == ""


def test_position_zero_falls_back_to_number(release_payload: dict[str, Any]) -> None:
    payload = copy.deepcopy(release_payload)
    payload["media"][0]["tracks"][0].update({"position": 0, "number": "A1"})

    tags = build_file_tags(CatalogRelease.from_payload(payload), "t1-1")

    assert tags.track_number == "A1"


def test_unparsable_dates_are_left_empty(release_payload: dict[str, Any]) -> None:
    payload = copy.deepcopy(release_payload)
    payload["date"] = "2020"
    payload["release-group"]["first-release-date"] = ""

    tags = build_file_tags(CatalogRelease.from_payload(payload), "t2-3")

    assert (tags.release_date, tags.release_year) == ("", "")
    assert (tags.original_date, tags.original_year) == ("", "")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("2020-05-01", ("2020-05-01", "2020")), ("2020-13-01", ("", "")), ("", ("", "")), ("05/01/2020", ("", ""))],
)
def test_split_date(value: str, expected: tuple[str, str]) -> None:
    assert split_date(value) == expected


def test_missing_track_raises(release: CatalogRelease) -> None:
    with pytest.raises(TrackNotFoundError):
        _ = find_track(release, "t9-9")


def test_missing_release_artist_raises(release_payload: dict[str, Any]) -> None:
    payload = copy.deepcopy(release_payload)
    payload["artist-credit"] = []

    with pytest.raises(TrackNotFoundError):
        _ = build_file_tags(CatalogRelease.from_payload(payload), "t2-3")


def test_desired_tag_map_keys(release: CatalogRelease) -> None:
    tags = build_file_tags(release, "t2-3")

    vorbis = desired_tag_map(tags, include_release_date=True)
    id3 = desired_tag_map(tags)

    assert vorbis["RELEASEDATE"] == "2020-05-01"
    assert "RELEASEDATE" not in id3
    assert id3["TRACKNUMBER"] == "3"
    assert id3["GENRE"] == ""
