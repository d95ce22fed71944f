"""TTL cache package.

Provides the JSON-file backed cache shared by the catalog, inventory and
media-index clients.
"""

from .ttl_store import CacheLoadError, CacheLookup, TTLCacheStore

__all__ = ["CacheLoadError", "CacheLookup", "TTLCacheStore"]
