"""Profile resolution by handle.

Flow: cache lookup -> legacy search -> exact-handle disambiguation ->
concurrent best-effort tier and enrichment lookups -> normalization ->
cache. Concurrent resolutions of the same handle share one upstream
flow.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Sequence

from ethoscompare.config.models.search_settings import ResolverSettings
from ethoscompare.core.models import ReputationLevel, UserProfile
from ethoscompare.core.normalization import ResponseNormalizer, clean_handle
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.services.cache_store import CacheStore
from ethoscompare.services.ethos.ethos_client import EthosClient
from ethoscompare.services.ethos.ethos_models import (
    EnrichedUserRecord,
    LegacySearchRecord,
)
from ethoscompare.shared.constants import CacheConfig, EthosAPIConfig
from ethoscompare.shared.errors import (
    ProfileNotFoundError,
    TransportDegradedError,
)
from ethoscompare.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

logger = logging.getLogger(__name__)


def select_candidate(matches: Sequence[LegacySearchRecord]) -> LegacySearchRecord:
    """Pick one record among exact-handle matches.

    Tie-break order: carries a profile id, then highest score, then the
    first returned (``max`` keeps the first of equal keys).
    """
    return max(matches, key=lambda record: (record.profile_id is not None, record.score))


class ProfileResolver:
    """Resolves a handle to a canonical UserProfile.

    Args:
        client: Ethos API client
        cache: Session cache store
        normalizer: Response normalizer
        settings: Resolver settings (offline fallback policy)
        search_limit: Result limit of the legacy search
        statistics: Optional statistics collector
    """

    def __init__(
        self,
        client: EthosClient,
        cache: CacheStore,
        normalizer: ResponseNormalizer | None = None,
        settings: ResolverSettings | None = None,
        search_limit: int = EthosAPIConfig.RESOLVE_SEARCH_LIMIT,
        statistics: StatisticsCollector | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.normalizer = normalizer or ResponseNormalizer()
        self.settings = settings or ResolverSettings()
        self.search_limit = search_limit
        self.statistics = statistics
        self._inflight: dict[str, asyncio.Future[UserProfile]] = {}

    async def resolve(self, handle: str) -> UserProfile:
        """Resolve ``handle`` to a profile.

        Args:
            handle: Handle as typed by the user (surrounding whitespace and a
                leading ``@`` are ignored; matching is case-insensitive)

        Returns:
            The resolved profile, or a synthetic placeholder when the primary
            search is unreachable and offline fallback is enabled

        Raises:
            ProfileNotFoundError: If no upstream record carries the handle
            TransportDegradedError: If the primary search failed and offline
                fallback is disabled
        """
        cleaned = clean_handle(handle)
        if not cleaned:
            raise ProfileNotFoundError(handle.strip())

        key = cleaned.lower()
        cached = self.cache.profiles.get(key)
        if cached is not None:
            self._record_cache(hit=True)
            return cached
        self._record_cache(hit=False)

        pending = self._inflight.get(key)
        if pending is None:
            pending = asyncio.ensure_future(self._resolve_uncached(cleaned, key))
            self._inflight[key] = pending
            pending.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(pending)

    async def _resolve_uncached(self, handle: str, key: str) -> UserProfile:
        start = time.perf_counter()
        log_operation_start(logger, "resolve_profile", {"handle": handle})

        try:
            records = await self.client.search_legacy(handle, self.search_limit)
        except TransportDegradedError as e:
            if not self.settings.offline_fallback:
                raise
            log_operation_error(
                logger,
                e,
                operation="resolve_profile",
                additional_context={"handle": handle},
                level=logging.WARNING,
            )
            profile = self.normalizer.synthetic_profile(handle)
            self.cache.profiles.put(key, profile)
            if self.statistics is not None:
                self.statistics.record_profile_resolved(synthetic=True)
            return profile

        matches = [record for record in records if record.username.lower() == key]
        if not matches:
            if self.statistics is not None:
                self.statistics.record_profile_not_found()
            raise ProfileNotFoundError(handle)

        chosen = select_candidate(matches)
        level = ReputationLevel.UNKNOWN
        enriched: EnrichedUserRecord | None = None
        if chosen.userkey:
            level, enriched = await asyncio.gather(
                self._fetch_level(chosen.userkey),
                self._fetch_enriched(chosen.username),
            )

        profile = self.normalizer.normalize(chosen, enriched, level)
        self.cache.profiles.put(key, profile)
        if self.statistics is not None:
            self.statistics.record_profile_resolved()

        log_operation_success(
            logger,
            "resolve_profile",
            (time.perf_counter() - start) * 1000,
            result_info={
                "handle": profile.handle,
                "candidates": len(matches),
                "enriched": enriched is not None,
            },
        )
        return profile

    async def _fetch_level(self, userkey: str) -> ReputationLevel:
        try:
            level = await self.client.get_score_level(userkey)
        except TransportDegradedError as e:
            log_operation_error(logger, e, operation="fetch_level", level=logging.WARNING)
            return ReputationLevel.UNKNOWN
        return ReputationLevel.parse(level)

    async def _fetch_enriched(self, handle: str) -> EnrichedUserRecord | None:
        try:
            records = await self.client.search_users(handle)
        except TransportDegradedError as e:
            log_operation_error(
                logger,
                e,
                operation="fetch_enriched",
                additional_context={"handle": handle},
                level=logging.WARNING,
            )
            return None
        key = handle.lower()
        return next((record for record in records if record.username.lower() == key), None)

    def _record_cache(self, *, hit: bool) -> None:
        if self.statistics is None:
            return
        if hit:
            self.statistics.record_cache_hit(CacheConfig.TYPE_PROFILE)
        else:
            self.statistics.record_cache_miss(CacheConfig.TYPE_PROFILE)
