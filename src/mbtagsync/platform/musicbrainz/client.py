"""Where: src/mbtagsync/platform/musicbrainz/client.py
What: Catalog client fetching MusicBrainz release documents.
Why: Combine the rate limiter, the release cache and the HTTP transport behind
     one ``fetch_release`` call used by the track processor.

Cached entries hold the raw JSON payload so the cache file stays a plain
mirror of the web service; the payload is decoded again on every hit.
Concurrent misses for the same release are not deduplicated.
"""

from __future__ import annotations

import json
from typing import Final

from mbtagsync.platform.cache import TTLCacheStore
from mbtagsync.platform.http import HTTPClient, HTTPError
from mbtagsync.platform.logging import logger
from mbtagsync.shared.errors import CatalogFetchError

from .models import CatalogFormatError, CatalogRelease
from .rate_limit import RateLimiter

DEFAULT_BASE_URL: Final[str] = "https://musicbrainz.org/ws/2"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 15.0
# ``isrcs`` is needed for recordings to carry their ISRC list.
RELEASE_INCLUDES: Final[tuple[str, ...]] = (
    "recordings",
    "labels",
    "artists",
    "genres",
    "tags",
    "release-groups",
    "isrcs",
)


class CatalogClient:
    """Fetch and cache ``CatalogRelease`` documents by release id."""

    def __init__(
        self,
        http: HTTPClient,
        rate_limiter: RateLimiter,
        cache: TTLCacheStore,
        user_agent: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http: HTTPClient = http
        self._rate_limiter: RateLimiter = rate_limiter
        self._cache: TTLCacheStore = cache
        self.user_agent: str = user_agent
        self.base_url: str = base_url.rstrip("/")
        self.timeout: float = timeout

    def release_url(self, release_id: str) -> str:
        return f"{self.base_url}/release/{release_id}"

    def fetch_release(self, release_id: str) -> CatalogRelease:
        """Return the release document for ``release_id``.

        A fresh cache entry short-circuits the request. Otherwise the call
        waits on the rate limiter and issues exactly one GET.

        Raises:
            CatalogFetchError: Transport failure, non-success status, or an
                undecodable document.
        """

        release_id = release_id.strip()
        if not release_id:
            raise CatalogFetchError("release id is empty")

        cached = self._cache.get(release_id)
        if cached.fresh:
            logger.debug("Release cache hit for %s", release_id)
            return _decode(release_id, cached.value)

        self._rate_limiter.acquire()
        url = self.release_url(release_id)
        logger.debug("Fetching release %s from %s", release_id, url)
        try:
            response = self._http.request(
                "GET",
                url,
                params={"inc": "+".join(RELEASE_INCLUDES), "fmt": "json"},
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout,
            )
        except HTTPError as exc:
            raise CatalogFetchError(f"release {release_id}: {exc}") from exc

        if response.status != 200:
            raise CatalogFetchError(f"release {release_id}: {response.status_text}")

        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise CatalogFetchError(f"release {release_id}: invalid JSON: {exc}") from exc

        release = _decode(release_id, payload)
        self._cache.put(release_id, payload)
        return release


def _decode(release_id: str, payload: object) -> CatalogRelease:
    try:
        return CatalogRelease.from_payload(payload)
    except CatalogFormatError as exc:
        raise CatalogFetchError(f"release {release_id}: {exc}") from exc


__all__ = ["CatalogClient", "DEFAULT_BASE_URL", "RELEASE_INCLUDES"]
