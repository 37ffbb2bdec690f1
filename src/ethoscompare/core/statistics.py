"""
Statistics Collection Module

Counters for cache efficiency, upstream traffic and resolution outcomes
of one comparison session. The CLI reports them with ``--verbose``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class SessionMetrics:
    """Container for session metrics."""

    # Cache metrics
    cache_hits: int = 0
    cache_misses: int = 0

    # API metrics
    api_calls: int = 0
    api_errors: int = 0
    api_time: float = 0.0

    # Resolution metrics
    profiles_resolved: int = 0
    synthetic_profiles: int = 0
    profiles_not_found: int = 0
    searches: int = 0
    searches_cancelled: int = 0

    @property
    def cache_hit_ratio(self) -> float:
        total = self.cache_hits + self.cache_misses
        return self.cache_hits / total if total > 0 else 0.0


class StatisticsCollector:
    """Central aggregator for session metrics."""

    def __init__(self) -> None:
        """Initialize the statistics collector."""
        self.metrics = SessionMetrics()
        self.session_start = datetime.now(timezone.utc)
        self.api_call_times: list[float] = []

    def record_cache_hit(self, cache_type: str) -> None:
        """Record a cache hit.

        Args:
            cache_type: Type of cache (profile or search)
        """
        self.metrics.cache_hits += 1
        logger.debug("Recorded cache hit for type: %s", cache_type)

    def record_cache_miss(self, cache_type: str) -> None:
        """Record a cache miss.

        Args:
            cache_type: Type of cache (profile or search)
        """
        self.metrics.cache_misses += 1
        logger.debug("Recorded cache miss for type: %s", cache_type)

    def record_api_call(
        self,
        endpoint: str,
        success: bool,
        duration: float | None = None,
    ) -> None:
        """Record an upstream API call.

        Args:
            endpoint: API endpoint called
            success: Whether the call was successful
            duration: Duration of the API call in seconds
        """
        self.metrics.api_calls += 1

        if not success:
            self.metrics.api_errors += 1

        if duration is not None:
            self.api_call_times.append(duration)
            self.metrics.api_time += duration

        logger.debug(
            "Recorded API call: %s, success=%s, duration=%s",
            endpoint,
            success,
            duration,
        )

    def record_profile_resolved(self, *, synthetic: bool = False) -> None:
        self.metrics.profiles_resolved += 1
        if synthetic:
            self.metrics.synthetic_profiles += 1

    def record_profile_not_found(self) -> None:
        self.metrics.profiles_not_found += 1

    def record_search(self, *, cancelled: bool = False) -> None:
        self.metrics.searches += 1
        if cancelled:
            self.metrics.searches_cancelled += 1

    def get_cache_hit_ratio(self) -> float:
        """Get the current cache hit ratio.

        Returns:
            Cache hit ratio as a percentage (0.0 to 100.0)
        """
        return self.metrics.cache_hit_ratio * 100.0

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of all collected statistics."""
        session_duration = (
            datetime.now(timezone.utc) - self.session_start
        ).total_seconds()

        return {
            "session_info": {
                "start_time": self.session_start.isoformat(),
                "duration_seconds": session_duration,
            },
            "cache": {
                "hits": self.metrics.cache_hits,
                "misses": self.metrics.cache_misses,
                "hit_ratio": self.metrics.cache_hit_ratio,
            },
            "api": {
                "calls": self.metrics.api_calls,
                "errors": self.metrics.api_errors,
                "total_time": self.metrics.api_time,
            },
            "resolution": {
                "profiles_resolved": self.metrics.profiles_resolved,
                "synthetic_profiles": self.metrics.synthetic_profiles,
                "profiles_not_found": self.metrics.profiles_not_found,
                "searches": self.metrics.searches,
                "searches_cancelled": self.metrics.searches_cancelled,
            },
        }

    def reset(self) -> None:
        """Reset all collected statistics."""
        self.metrics = SessionMetrics()
        self.session_start = datetime.now(timezone.utc)
        self.api_call_times.clear()

        logger.debug("StatisticsCollector reset")
