"""Where: src/mbtagsync/platform/musicbrainz/rate_limit.py
What: Thread-safe throttle enforcing MusicBrainz WS2 request spacing.
Why: MusicBrainz asks clients to limit traffic to roughly 1 request per second.
"""

from __future__ import annotations

import threading
import time
from typing import Final

DEFAULT_MIN_INTERVAL: Final[float] = 1.0


class RateLimiter:
    """Provide a minimal monotonic sleep guard for outgoing requests.

    The lock is held while sleeping, so callers sharing one instance are
    released strictly one interval apart. A blocked caller cannot be
    cancelled.
    """

    def __init__(self, min_interval_seconds: float = DEFAULT_MIN_INTERVAL) -> None:
        self._min_interval: float = min_interval_seconds
        self._lock: Final[threading.Lock] = threading.Lock()
        self._last_start: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    def acquire(self) -> None:
        """Delay the caller until the minimum spacing constraint is met."""

        with self._lock:
            if self._last_start is not None:
                elapsed = time.monotonic() - self._last_start
                wait = self._min_interval - elapsed
                if wait > 0:
                    time.sleep(wait)
            self._last_start = time.monotonic()


__all__ = ["DEFAULT_MIN_INTERVAL", "RateLimiter"]
