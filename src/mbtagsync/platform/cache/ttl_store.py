"""Where: src/mbtagsync/platform/cache/ttl_store.py
What: Keyed JSON-file cache whose entries expire after a fixed TTL.
Why: Catalog, inventory and media-index lookups are reused across files and runs.

File format: a flat JSON object mapping each key to
``{"value": <json>, "timestamp": <epoch seconds>}``. The whole map is
rewritten on every ``put``; there is no cross-process locking, so the last
writer wins.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import Any, NamedTuple, cast

from mbtagsync.config.file_ops import replace_text_file
from mbtagsync.platform.logging import logger


class CacheLoadError(Exception):
    """Raised when a cache file exists but cannot be decoded."""


class CacheLookup(NamedTuple):
    """Result of a cache read."""

    value: Any
    found: bool
    fresh: bool


_MISS = CacheLookup(value=None, found=False, fresh=False)


class TTLCacheStore:
    """JSON-backed cache with per-store time-to-live."""

    def __init__(
        self,
        path: Path,
        ttl: timedelta,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path: Path = path
        self.ttl: timedelta = ttl
        self._clock: Callable[[], float] = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._loaded: bool = False

    def load(self) -> None:
        """Read the backing file into memory.

        A missing file yields an empty cache.

        Raises:
            CacheLoadError: The file is not a JSON object of cache entries.
        """

        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._entries = {}
            self._loaded = True
            return
        except OSError as exc:
            raise CacheLoadError(f"Failed to read cache file {self.path}: {exc}") from exc

        try:
            document = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as exc:
            raise CacheLoadError(f"Malformed cache file {self.path}: {exc}") from exc

        if not isinstance(document, dict):
            raise CacheLoadError(f"Malformed cache file {self.path}: expected a JSON object")

        entries: dict[str, dict[str, Any]] = {}
        for key, entry in cast(dict[str, object], document).items():
            if not isinstance(entry, dict) or "timestamp" not in entry:
                raise CacheLoadError(f"Malformed cache entry {key!r} in {self.path}")
            entry_dict = cast(dict[str, Any], entry)
            timestamp = entry_dict["timestamp"]
            if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
                raise CacheLoadError(f"Malformed timestamp for {key!r} in {self.path}")
            entries[key] = {"value": entry_dict.get("value"), "timestamp": float(timestamp)}

        self._entries = entries
        self._loaded = True
        logger.debug("Loaded %d cache entries from %s", len(entries), self.path)

    def save(self) -> None:
        """Rewrite the backing file with the full in-memory map."""

        content = json.dumps(self._entries, indent=2, ensure_ascii=False, sort_keys=True)
        replace_text_file(self.path, content + "\n")

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def get(self, key: str) -> CacheLookup:
        """Look up ``key``; ``fresh`` is true only while the entry is younger than the TTL."""

        self._ensure_loaded()
        entry = self._entries.get(key)
        if entry is None:
            return _MISS
        age = self._clock() - float(entry["timestamp"])
        return CacheLookup(
            value=entry["value"],
            found=True,
            fresh=age < self.ttl.total_seconds(),
        )

    def get_fresh(self, key: str) -> Any | None:
        """Return the cached value when fresh, otherwise ``None``."""

        lookup = self.get(key)
        return lookup.value if lookup.fresh else None

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` stamped with the current time and persist the map."""

        self._ensure_loaded()
        self._entries[key] = {"value": value, "timestamp": self._clock()}
        self.save()

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._entries)


__all__ = ["CacheLoadError", "CacheLookup", "TTLCacheStore"]
