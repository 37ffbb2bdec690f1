"""Profile comparison service.

The single entry point of the presentation layer: ``resolve``, ``search``,
``derive_metrics`` and ``clear_cache``, plus ``compare`` which resolves
both comparison slots concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from ethoscompare.core import metrics as metrics_module
from ethoscompare.core.metrics import ComparisonOutcome, DisplayMetrics, MetricComparison
from ethoscompare.core.models import SearchCandidate, UserProfile
from ethoscompare.core.resolver.profile_resolver import ProfileResolver
from ethoscompare.core.search.cancellation import CancellationToken
from ethoscompare.core.search.search_resolver import SearchResolver
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.services.cache_store import CacheStore
from ethoscompare.shared.errors import ProfileNotFoundError, TransportDegradedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonSlot:
    """One side of a comparison: a profile with its metrics, or an error."""

    handle: str
    profile: UserProfile | None = None
    metrics: DisplayMetrics | None = None
    error: str | None = None

    @property
    def resolved(self) -> bool:
        return self.profile is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "handle": self.handle,
            "profile": self.profile.to_dict() if self.profile else None,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class ProfileComparison:
    """Result of comparing two handles."""

    left: ComparisonSlot
    right: ComparisonSlot
    metrics: list[MetricComparison] = field(default_factory=list)

    @property
    def ready(self) -> bool:
        return self.left.resolved and self.right.resolved

    def tally(self) -> dict[str, int]:
        """Number of rows won by each side, and draws."""
        counts = {outcome.value: 0 for outcome in ComparisonOutcome}
        for row in self.metrics:
            counts[row.outcome.value] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
            "metrics": [row.to_dict() for row in self.metrics],
            "tally": self.tally(),
        }


class ProfileComparisonService:
    """Facade over resolution, search and metrics.

    Args:
        profile_resolver: Profile resolver
        search_resolver: Search resolver
        cache: Cache store shared by both resolvers
        statistics: Optional statistics collector
    """

    def __init__(
        self,
        profile_resolver: ProfileResolver,
        search_resolver: SearchResolver,
        cache: CacheStore,
        statistics: StatisticsCollector | None = None,
    ) -> None:
        self.profile_resolver = profile_resolver
        self.search_resolver = search_resolver
        self.cache = cache
        self._statistics = statistics

    async def resolve(self, handle: str) -> UserProfile:
        """Resolve a handle; see ProfileResolver.resolve."""
        return await self.profile_resolver.resolve(handle)

    async def search(
        self,
        query: str,
        token: CancellationToken | None = None,
    ) -> list[SearchCandidate]:
        return await self.search_resolver.search(query, token)

    def derive_metrics(self, profile: UserProfile | Mapping[str, Any]) -> DisplayMetrics:
        return metrics_module.derive_metrics(profile)

    def clear_cache(self) -> None:
        """Drop every cached profile and search result."""
        self.cache.clear()

    async def compare(self, left_handle: str, right_handle: str) -> ProfileComparison:
        """Resolve both handles concurrently and compare their metrics.

        A slot that cannot be resolved carries an error message instead of
        a profile; metric rows are produced only when both slots resolved.
        """
        left, right = await asyncio.gather(
            self._resolve_slot(left_handle),
            self._resolve_slot(right_handle),
        )
        rows: list[MetricComparison] = []
        if left.metrics is not None and right.metrics is not None:
            rows = metrics_module.compare_metrics(left.metrics, right.metrics)
        return ProfileComparison(left=left, right=right, metrics=rows)

    def statistics(self) -> dict[str, Any]:
        """Session statistics summary (empty without a collector)."""
        if self._statistics is None:
            return {}
        return self._statistics.get_summary()

    async def _resolve_slot(self, handle: str) -> ComparisonSlot:
        try:
            profile = await self.resolve(handle)
        except (ProfileNotFoundError, TransportDegradedError) as e:
            return ComparisonSlot(handle=handle, error=e.message)
        return ComparisonSlot(
            handle=profile.handle,
            profile=profile,
            metrics=self.derive_metrics(profile),
        )
