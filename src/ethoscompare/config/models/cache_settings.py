"""Cache configuration model.

Expiry windows of the in-memory profile and search caches.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ethoscompare.shared.constants import CacheConfig


class CacheSettings(BaseModel):
    """Cache configuration."""

    profile_ttl: float = Field(
        default=CacheConfig.PROFILE_TTL,
        gt=0,
        description="Profile cache time-to-live in seconds",
    )
    search_ttl: float = Field(
        default=CacheConfig.SEARCH_TTL,
        gt=0,
        description="Search result cache time-to-live in seconds",
    )


__all__ = ["CacheSettings"]
