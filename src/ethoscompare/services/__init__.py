"""Service layer: upstream API client and cache stores."""

from __future__ import annotations

from .cache_store import CacheEntry, CacheStore, TTLCache
from .ethos import EthosClient

__all__ = ["CacheEntry", "CacheStore", "EthosClient", "TTLCache"]
