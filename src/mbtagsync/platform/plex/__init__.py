"""Plex Media Server integration."""

from .client import PlexClient, PlexError, PlexNotFoundError
from .models import (
    PlexDirectory,
    PlexIdentity,
    PlexMediaContainer,
    PlexPayloadError,
    PlexTrack,
    normalize_album_key,
    parse_identity,
    parse_media_container,
)

__all__ = [
    "PlexClient",
    "PlexDirectory",
    "PlexError",
    "PlexIdentity",
    "PlexMediaContainer",
    "PlexNotFoundError",
    "PlexPayloadError",
    "PlexTrack",
    "normalize_album_key",
    "parse_identity",
    "parse_media_container",
]
