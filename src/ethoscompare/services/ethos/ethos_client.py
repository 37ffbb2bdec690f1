"""Ethos API client.

Async facade over a ``requests.Session`` for the three upstream endpoints.
Blocking requests run in worker threads so independent lookups (the two
comparison slots, the tier and enrichment calls) proceed concurrently.

Every transport failure is mapped to ``TransportDegradedError``: timeouts,
connection errors, non-2xx statuses, undecodable bodies and a legacy
envelope with ``ok`` other than true.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ethoscompare.config.models.api_settings import EthosAPISettings
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.shared.constants import APIFields, EthosAPIConfig, EthosEndpoints
from ethoscompare.shared.errors import (
    ErrorCode,
    TransportDegradedError,
    create_transport_error,
)
from ethoscompare.shared.logging import log_api_call, log_operation_error

from .ethos_models import (
    EnrichedSearchResponse,
    EnrichedUserRecord,
    LegacySearchRecord,
    LegacySearchResponse,
    ScoreLevelResponse,
)

logger = logging.getLogger(__name__)

HTTP_SERVER_ERROR = 500


def create_session(settings: EthosAPISettings) -> requests.Session:
    """Create a session with client identification and gateway retries.

    Args:
        settings: Ethos API settings

    Returns:
        Configured requests.Session
    """
    session = requests.Session()

    # Gateway statuses only; a read timeout surfaces at once as a timeout
    retry_strategy = Retry(
        total=settings.retry_attempts,
        connect=0,
        read=False,
        status=settings.retry_attempts,
        status_forcelist=EthosAPIConfig.RETRY_STATUS_CODES,
        backoff_factor=settings.retry_backoff,
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)

    session.headers[EthosAPIConfig.CLIENT_HEADER] = settings.client_name
    session.headers["Accept"] = "application/json"

    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session


class EthosClient:
    """Ethos API client with bounded timeouts and structured error mapping.

    Args:
        settings: Ethos API settings
        session: Optional pre-configured session (default: create_session)
        statistics: Optional statistics collector for call accounting
    """

    def __init__(
        self,
        settings: EthosAPISettings | None = None,
        session: requests.Session | None = None,
        statistics: StatisticsCollector | None = None,
    ) -> None:
        self.settings = settings or EthosAPISettings()
        self.session = session or create_session(self.settings)
        self.statistics = statistics

    async def search_legacy(self, query: str, limit: int) -> list[LegacySearchRecord]:
        """Query the legacy search endpoint.

        Args:
            query: Search text (a handle or partial name)
            limit: Maximum number of records requested

        Returns:
            Records in upstream order

        Raises:
            TransportDegradedError: On any transport failure or ``ok`` not true
        """
        url = self.settings.legacy_base_url.rstrip("/") + EthosEndpoints.LEGACY_SEARCH
        payload = await self._get_json(
            url,
            {APIFields.QUERY: query, APIFields.LIMIT: limit},
            operation="search_legacy",
        )
        response = LegacySearchResponse.model_validate(payload)
        if not response.ok:
            error = create_transport_error(
                ErrorCode.API_INVALID_RESPONSE,
                "Legacy search returned ok=false",
                endpoint=EthosEndpoints.LEGACY_SEARCH,
                operation="search_legacy",
            )
            log_operation_error(logger, error, level=logging.WARNING)
            raise error
        return list(response.data.values)

    async def get_score_level(self, userkey: str) -> str:
        """Fetch the reputation tier for an internal user key.

        Returns:
            The raw upstream level string ("" when absent)

        Raises:
            TransportDegradedError: On any transport failure
        """
        url = self.settings.base_url.rstrip("/") + EthosEndpoints.SCORE_BY_USERKEY
        payload = await self._get_json(
            url,
            {APIFields.USERKEY: userkey},
            operation="get_score_level",
        )
        return ScoreLevelResponse.model_validate(payload).level

    async def search_users(self, query: str) -> list[EnrichedUserRecord]:
        """Query the enriched user search endpoint.

        Raises:
            TransportDegradedError: On any transport failure
        """
        url = self.settings.base_url.rstrip("/") + EthosEndpoints.USERS_SEARCH
        payload = await self._get_json(
            url,
            {APIFields.QUERY: query},
            operation="search_users",
        )
        return list(EnrichedSearchResponse.model_validate(payload).values)

    def close(self) -> None:
        self.session.close()

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any],
        operation: str,
    ) -> dict[str, Any]:
        start = time.perf_counter()
        try:
            payload = await asyncio.to_thread(self._request, url, params, operation)
        except TransportDegradedError:
            self._record(url, success=False, start=start)
            raise
        self._record(url, success=True, start=start)
        return payload

    def _record(self, url: str, *, success: bool, start: float) -> None:
        if self.statistics is not None:
            self.statistics.record_api_call(
                url,
                success=success,
                duration=time.perf_counter() - start,
            )

    def _request(
        self,
        url: str,
        params: dict[str, Any],
        operation: str,
    ) -> dict[str, Any]:
        """Perform one GET and decode the JSON object body (worker thread)."""
        start = time.perf_counter()
        try:
            response = self.session.get(url, params=params, timeout=self.settings.timeout)
        except requests.exceptions.Timeout as e:
            raise self._failure(
                ErrorCode.API_TIMEOUT,
                f"Request timed out after {self.settings.timeout}s",
                url,
                operation,
                e,
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise self._failure(
                ErrorCode.API_CONNECTION_ERROR,
                f"Connection failed: {e}",
                url,
                operation,
                e,
            ) from e
        except requests.exceptions.RequestException as e:
            raise self._failure(
                ErrorCode.API_REQUEST_FAILED,
                f"Request failed: {e}",
                url,
                operation,
                e,
            ) from e

        duration_ms = (time.perf_counter() - start) * 1000
        log_api_call(
            logger,
            url,
            status_code=response.status_code,
            duration_ms=duration_ms,
            context={"operation": operation},
        )

        if not response.ok:
            code = (
                ErrorCode.API_SERVER_ERROR
                if response.status_code >= HTTP_SERVER_ERROR
                else ErrorCode.API_REQUEST_FAILED
            )
            raise self._failure(
                code,
                f"Upstream returned HTTP {response.status_code}",
                url,
                operation,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise self._failure(
                ErrorCode.API_INVALID_RESPONSE,
                "Response body is not valid JSON",
                url,
                operation,
                e,
            ) from e

        if not isinstance(payload, dict):
            raise self._failure(
                ErrorCode.API_INVALID_RESPONSE,
                f"Expected a JSON object, got {type(payload).__name__}",
                url,
                operation,
            )
        return payload

    def _failure(
        self,
        code: ErrorCode,
        message: str,
        url: str,
        operation: str,
        original_error: Exception | None = None,
        status_code: int | None = None,
    ) -> TransportDegradedError:
        error = create_transport_error(
            code,
            message,
            endpoint=url,
            operation=operation,
            original_error=original_error,
            status_code=status_code,
        )
        log_operation_error(logger, error, level=logging.WARNING)
        return error
