"""Debounced, cancellable typeahead search.

Every ``submit`` supersedes the previous request. A superseded request
returns None and never reaches ``on_results``, even when its upstream
call completes after the newer one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ethoscompare.config.models.search_settings import SearchSettings
from ethoscompare.core.models import SearchCandidate
from ethoscompare.core.normalization import clean_handle
from ethoscompare.core.search.cancellation import CancellationSource
from ethoscompare.core.search.search_resolver import SearchResolver

logger = logging.getLogger(__name__)

ResultsCallback = Callable[[str, list[SearchCandidate]], None]


class TypeaheadSearch:
    """Keystroke search controller.

    Args:
        resolver: Search resolver
        settings: Search settings (debounce timings)
        on_results: Called with (query, results) for live requests only
        sleep: Awaitable sleep used for debouncing (default: asyncio.sleep)
    """

    def __init__(
        self,
        resolver: SearchResolver,
        settings: SearchSettings | None = None,
        on_results: ResultsCallback | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.resolver = resolver
        self.settings = settings or resolver.settings
        self.on_results = on_results
        self._sleep = sleep
        self._source = CancellationSource()

    def debounce_for(self, query: str) -> float:
        """Debounce delay in seconds; shorter once the query is long enough."""
        if len(clean_handle(query)) >= self.settings.fast_debounce_min_length:
            return self.settings.fast_debounce_seconds
        return self.settings.debounce_seconds

    async def submit(self, query: str) -> list[SearchCandidate] | None:
        """Search for ``query`` unless superseded.

        Returns:
            The results, or None when a newer submit or ``cancel`` superseded
            this request
        """
        token = self._source.issue()

        delay = self.debounce_for(query)
        if delay > 0:
            await self._sleep(delay)
        if token.cancelled:
            logger.debug("Search '%s' superseded during debounce", query)
            return None

        results = await self.resolver.search(query, token)
        if token.cancelled:
            logger.debug("Discarding stale results for '%s'", query)
            return None

        if self.on_results is not None:
            self.on_results(query, results)
        return results

    def cancel(self) -> None:
        """Supersede any in-flight request."""
        self._source.cancel_all()
