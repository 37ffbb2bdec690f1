"""Typeahead profile search.

Flow: minimum-length gate -> cache (skipped for exact-handle probes) ->
legacy search -> de-duplicate -> filter -> rank -> truncate -> cache.
Search is best-effort: transport failures produce an empty result.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ethoscompare.config.models.search_settings import SearchSettings
from ethoscompare.core.models import SearchCandidate
from ethoscompare.core.normalization import ResponseNormalizer, clean_handle
from ethoscompare.core.search.cancellation import CancellationToken
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.services.cache_store import CacheStore
from ethoscompare.services.ethos.ethos_client import EthosClient
from ethoscompare.shared.constants import CacheConfig, SearchConfig
from ethoscompare.shared.errors import TransportDegradedError
from ethoscompare.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def is_handle_probe(query: str) -> bool:
    """True when ``query`` could be a complete handle."""
    return SearchConfig.HANDLE_PROBE_PATTERN.match(query) is not None


def deduplicate_candidates(candidates: Iterable[SearchCandidate]) -> list[SearchCandidate]:
    """Keep one candidate per handle (case-insensitive).

    The first occurrence keeps its position; it is replaced in place by a
    later duplicate only when the later one carries a profile id and the
    kept one does not.
    """
    result: list[SearchCandidate] = []
    positions: dict[str, int] = {}
    for candidate in candidates:
        key = candidate.handle.lower()
        index = positions.get(key)
        if index is None:
            positions[key] = len(result)
            result.append(candidate)
        elif candidate.has_profile_id and not result[index].has_profile_id:
            result[index] = candidate
    return result


def matches_query(candidate: SearchCandidate, query: str) -> bool:
    """Handle or display name starts with the query, or the bio contains it."""
    needle = query.lower()
    handle = candidate.handle.lower()
    return (
        handle == needle
        or handle.startswith(needle)
        or candidate.display_name.lower().startswith(needle)
        or needle in candidate.bio.lower()
    )


def rank_candidates(candidates: list[SearchCandidate], query: str) -> list[SearchCandidate]:
    """Exact handle first, profile id first among exact matches, then score descending."""
    needle = query.lower()

    def sort_key(candidate: SearchCandidate) -> tuple[bool, bool, int]:
        exact = candidate.handle.lower() == needle
        return (not exact, not (exact and candidate.has_profile_id), -candidate.score)

    return sorted(candidates, key=sort_key)


class SearchResolver:
    """Typeahead search over the legacy search endpoint.

    Args:
        client: Ethos API client
        cache: Session cache store
        normalizer: Response normalizer (maps records to candidates)
        settings: Search settings
        statistics: Optional statistics collector
    """

    def __init__(
        self,
        client: EthosClient,
        cache: CacheStore,
        normalizer: ResponseNormalizer | None = None,
        settings: SearchSettings | None = None,
        statistics: StatisticsCollector | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.normalizer = normalizer or ResponseNormalizer()
        self.settings = settings or SearchSettings()
        self.statistics = statistics

    async def search(
        self,
        query: str,
        token: CancellationToken | None = None,
    ) -> list[SearchCandidate]:
        """Search candidates for ``query``.

        Args:
            query: Text typed by the user
            token: Optional cancellation token of the issuing request

        Returns:
            Up to ``max_results`` ranked candidates; empty for short queries,
            transport failures and requests cancelled before the call
        """
        text = clean_handle(query)
        if len(text) < self.settings.min_query_length:
            return []
        if token is not None and token.cancelled:
            self._record_search(cancelled=True)
            return []

        probe = is_handle_probe(text)
        key = text.lower()
        if not probe:
            cached = self.cache.searches.get(key)
            if cached is not None:
                self._record_cache(hit=True)
                return list(cached)
            self._record_cache(hit=False)

        try:
            records = await self.client.search_legacy(text, self.settings.upstream_limit)
        except TransportDegradedError as e:
            log_operation_error(
                logger,
                e,
                operation="search_profiles",
                additional_context={"query": text},
                level=logging.WARNING,
            )
            return []

        candidates = deduplicate_candidates(
            self.normalizer.candidate_from_record(record) for record in records
        )
        candidates = [candidate for candidate in candidates if matches_query(candidate, text)]
        results = rank_candidates(candidates, text)[: self.settings.max_results]

        cancelled = token is not None and token.cancelled
        if not probe and not cancelled:
            self.cache.searches.put(key, tuple(results))
        self._record_search(cancelled=cancelled)

        logger.debug(
            "Search '%s' returned %d of %d records",
            text,
            len(results),
            len(records),
        )
        return results

    def _record_search(self, *, cancelled: bool) -> None:
        if self.statistics is not None:
            self.statistics.record_search(cancelled=cancelled)

    def _record_cache(self, *, hit: bool) -> None:
        if self.statistics is None:
            return
        if hit:
            self.statistics.record_cache_hit(CacheConfig.TYPE_SEARCH)
        else:
            self.statistics.record_cache_miss(CacheConfig.TYPE_SEARCH)
