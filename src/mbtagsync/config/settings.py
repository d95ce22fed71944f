"""Where: src/mbtagsync/config/settings.py
What: Static runtime constants shared by feature and platform layers.
Why: Expose fixed values (extensions, cache file names, TTL defaults) without file I/O.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Final

# Extensions recognised by the scanner. ``False`` marks a container that is
# known but not yet writable, so files with it are skipped.
SUPPORTED_EXTENSIONS: Final[dict[str, bool]] = {
    ".flac": True,
    ".mp3": True,
    ".m4a": False,
    ".ogg": False,
    ".wav": False,
}

# Cache file names (one JSON document per cache kind) -----------------------

MB_RELEASE_CACHE_FILE: Final[str] = "mb_releases.json"
LIDARR_ARTIST_CACHE_FILE: Final[str] = "lidarr_artists.json"
LIDARR_ALBUM_CACHE_FILE: Final[str] = "lidarr_albums.json"
LIDARR_TRACK_CACHE_FILE: Final[str] = "lidarr_tracks.json"
PLEX_ALBUM_KEY_CACHE_FILE: Final[str] = "plex_album_keys.json"

# Default cache lifetimes ------------------------------------------------------

MB_RELEASE_CACHE_TTL: Final[timedelta] = timedelta(days=7)
LIDARR_CACHE_TTL: Final[timedelta] = timedelta(hours=1)
PLEX_CACHE_TTL: Final[timedelta] = timedelta(hours=1)

# Environment forced onto tag-editing subprocesses.
UTF8_LOCALE_ENV: Final[dict[str, str]] = {"LANG": "en_US.UTF-8", "LC_ALL": "en_US.UTF-8"}


def is_enabled_extension(suffix: str) -> bool:
    """Return whether files with ``suffix`` should be processed."""

    return SUPPORTED_EXTENSIONS.get(suffix.lower(), False)


__all__ = [
    "LIDARR_ALBUM_CACHE_FILE",
    "LIDARR_ARTIST_CACHE_FILE",
    "LIDARR_CACHE_TTL",
    "LIDARR_TRACK_CACHE_FILE",
    "MB_RELEASE_CACHE_FILE",
    "MB_RELEASE_CACHE_TTL",
    "PLEX_ALBUM_KEY_CACHE_FILE",
    "PLEX_CACHE_TTL",
    "SUPPORTED_EXTENSIONS",
    "UTF8_LOCALE_ENV",
    "is_enabled_extension",
]
