"""In-memory TTL cache stores.

Two process-local stores back the resolvers: resolved profiles live for
minutes, typeahead results for seconds. Entries expire lazily when read;
``purge_expired`` is an optional sweep for long-running sessions.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from ethoscompare.shared.constants import CacheConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the clock reading at which it was stored."""

    value: T
    stored_at: float

    def is_expired(self, now: float, ttl: float) -> bool:
        return now - self.stored_at >= ttl


class TTLCache(Generic[T]):
    """Key/value store whose entries expire ``ttl`` seconds after the write.

    Args:
        ttl: Time-to-live in seconds
        clock: Monotonic clock returning seconds (default: time.monotonic)
        name: Cache name used in log messages
    """

    def __init__(
        self,
        ttl: float,
        clock: Clock = time.monotonic,
        name: str = "cache",
    ) -> None:
        if ttl <= 0:
            msg = f"ttl must be positive, got {ttl}"
            raise ValueError(msg)
        self.ttl = ttl
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def get(self, key: str) -> T | None:
        """Return the live value for ``key``, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock(), self.ttl):
            del self._entries[key]
            logger.debug("Cache entry expired: %s[%s]", self.name, key)
            return None
        return entry.value

    def put(self, key: str, value: T) -> None:
        """Store ``value`` under ``key``, overwriting any previous entry."""
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def purge_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if entry.is_expired(now, self.ttl)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %d expired entries from %s", len(expired), self.name)
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class CacheStore:
    """The profile and search caches of one session.

    Created once per container; tests build their own instance with a
    controllable clock.
    """

    def __init__(
        self,
        profile_ttl: float = CacheConfig.PROFILE_TTL,
        search_ttl: float = CacheConfig.SEARCH_TTL,
        clock: Clock = time.monotonic,
    ) -> None:
        self.profiles: TTLCache = TTLCache(
            profile_ttl,
            clock=clock,
            name=CacheConfig.TYPE_PROFILE,
        )
        self.searches: TTLCache = TTLCache(
            search_ttl,
            clock=clock,
            name=CacheConfig.TYPE_SEARCH,
        )

    def clear(self) -> None:
        """Empty both caches."""
        self.profiles.clear()
        self.searches.clear()
        logger.info("Cache cleared")

    def purge_expired(self) -> int:
        return self.profiles.purge_expired() + self.searches.purge_expired()
