"""Where: src/mbtagsync/features/tagging/domain/release_tags.py
What: Derive the desired ``FileTags`` for one track from a catalog release.
Why: Keep the catalog-to-tag rules pure so numbering, dates and credits are unit-testable.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from mbtagsync.platform.musicbrainz.models import (
    ArtistCredit,
    CatalogRelease,
    CatalogTrack,
    Medium,
)
from mbtagsync.shared.errors import TrackNotFoundError
from mbtagsync.shared.file_tags import FileTags


class ArtistCreditMode(StrEnum):
    """Which name of an artist-credit entry ends up in the tag."""

    CREDITED = "credited"
    CANONICAL = "canonical"


@dataclass(frozen=True, slots=True)
class ArtistCreditPolicy:
    """How artist-credit lists are flattened into one string.

    ``delimiter``, when non-empty, replaces the catalog join phrase between
    consecutive credits.
    """

    mode: ArtistCreditMode = ArtistCreditMode.CREDITED
    delimiter: str = ""


@dataclass(frozen=True, slots=True)
class TrackPlacement:
    """A track together with its medium and 1-based medium ordinal."""

    track: CatalogTrack
    medium: Medium
    disc_number: int


def join_artist_credit(
    credits: Sequence[ArtistCredit], policy: ArtistCreditPolicy | None = None
) -> str:
    """Flatten an artist-credit list, e.g. ``Band feat. Singer``."""

    policy = policy or ArtistCreditPolicy()
    parts: list[str] = []
    last = len(credits) - 1
    for index, credit in enumerate(credits):
        if policy.mode is ArtistCreditMode.CANONICAL and credit.artist_name:
            parts.append(credit.artist_name)
        else:
            parts.append(credit.name)
        if policy.delimiter:
            if index < last:
                parts.append(policy.delimiter)
        else:
            parts.append(credit.join_phrase)
    return "".join(parts).strip()


def split_date(value: str) -> tuple[str, str]:
    """Return ``(YYYY-MM-DD, YYYY)`` or two empty strings when unparsable."""

    try:
        parsed = datetime.strptime(value.strip(), "%Y-%m-%d")
    except ValueError:
        return "", ""
    return parsed.strftime("%Y-%m-%d"), f"{parsed.year:04d}"


def find_track(release: CatalogRelease, track_id: str) -> TrackPlacement:
    """Locate ``track_id`` among the release media.

    Raises:
        TrackNotFoundError: No medium contains the track.
    """

    for ordinal, medium in enumerate(release.media, start=1):
        for track in medium.tracks:
            if track.id == track_id:
                return TrackPlacement(track=track, medium=medium, disc_number=ordinal)
    raise TrackNotFoundError(f"track {track_id} not found in release {release.id}")


def top_genre(release: CatalogRelease) -> str:
    """Most-voted genre name; ties keep catalog order."""

    best = ""
    best_count = -1
    for genre in release.genres:
        if genre.count > best_count:
            best, best_count = genre.name, genre.count
    return best


def build_file_tags(
    release: CatalogRelease,
    track_id: str,
    *,
    policy: ArtistCreditPolicy | None = None,
    write_genre: bool = False,
) -> FileTags:
    """Build the desired tags for ``track_id`` on ``release``.

    Raises:
        TrackNotFoundError: The track is absent or the release has no
            release-level artist credit.
    """

    placement = find_track(release, track_id)
    track = placement.track

    if not release.artist_credit:
        raise TrackNotFoundError(f"release {release.id} has no artist credit")
    release_artist = release.artist_credit[0].name
    if policy is not None and policy.mode is ArtistCreditMode.CANONICAL:
        release_artist = release.artist_credit[0].artist_name or release_artist

    release_date, release_year = split_date(release.date)
    original_date, original_year = split_date(release.release_group.first_release_date)

    track_number = str(track.position) if track.position > 0 else track.number

    return FileTags(
        artist=join_artist_credit(track.artist_credit or release.artist_credit, policy),
        album_artist=release_artist,
        genre=top_genre(release) if write_genre else "",
        release_date=release_date,
        release_year=release_year,
        original_date=original_date,
        original_year=original_year,
        album=release.title,
        title=track.title,
        isrc=track.recording.isrcs[0] if track.recording.isrcs else "",
        track_number=track_number,
        track_total=str(len(placement.medium.tracks)),
        disc_number=str(placement.disc_number),
        disc_total=str(len(release.media)),
    )


__all__ = [
    "ArtistCreditMode",
    "ArtistCreditPolicy",
    "TrackPlacement",
    "build_file_tags",
    "find_track",
    "join_artist_credit",
    "split_date",
    "top_genre",
]
