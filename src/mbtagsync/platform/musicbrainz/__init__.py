"""MusicBrainz WS2 integration: rate limiting, etiquette and release lookups."""

from .client import DEFAULT_BASE_URL, RELEASE_INCLUDES, CatalogClient
from .models import (
    ArtistCredit,
    CatalogFormatError,
    CatalogRelease,
    CatalogTrack,
    Genre,
    Medium,
    Recording,
    ReleaseGroup,
)
from .rate_limit import DEFAULT_MIN_INTERVAL, RateLimiter
from .user_agent import format_user_agent, resolve_user_agent

__all__ = [
    "ArtistCredit",
    "CatalogClient",
    "CatalogFormatError",
    "CatalogRelease",
    "CatalogTrack",
    "DEFAULT_BASE_URL",
    "DEFAULT_MIN_INTERVAL",
    "Genre",
    "Medium",
    "RELEASE_INCLUDES",
    "RateLimiter",
    "Recording",
    "ReleaseGroup",
    "format_user_agent",
    "resolve_user_agent",
]
