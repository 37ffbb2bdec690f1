"""
Pytest configuration and shared fixtures for ethoscompare tests.

This module provides the fake clock, upstream payloads, a mocked Ethos
client and resolvers wired around them.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any
from unittest.mock import Mock

import pytest

from ethoscompare.cli.common.context import clear_cli_context
from ethoscompare.config import ResolverSettings, SearchSettings
from ethoscompare.core.comparison import ProfileComparisonService
from ethoscompare.core.normalization import ResponseNormalizer
from ethoscompare.core.resolver import ProfileResolver
from ethoscompare.core.search import SearchResolver
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.services.cache_store import CacheStore
from ethoscompare.services.ethos.ethos_client import EthosClient
from ethoscompare.services.ethos.ethos_models import (
    EnrichedUserRecord,
    LegacySearchRecord,
)

WEI_PER_ETH = 10**18


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def legacy_record(username: str, **overrides: Any) -> LegacySearchRecord:
    """Build a legacy search record from its upstream (camelCase) payload."""
    payload: dict[str, Any] = {
        "username": username,
        "name": username.title(),
        "avatar": f"https://img.example/{username}.png",
        "description": f"{username} builds things",
        "userkey": f"service:x.com:{username}",
        "primaryAddress": "0x0000000000000000000000000000000000000001",
        "score": 1400,
        "profileId": 42,
    }
    payload.update(overrides)
    return LegacySearchRecord.model_validate(payload)


def enriched_record(username: str, **overrides: Any) -> EnrichedUserRecord:
    """Build an enriched user record from its upstream (camelCase) payload."""
    payload: dict[str, Any] = {
        "username": username,
        "displayName": f"{username.title()} Enriched",
        "avatarUrl": f"https://cdn.example/{username}.png",
        "description": "enriched bio",
        "score": 1650,
        "xpTotal": 12345,
        "xpStreakDays": 12,
        "twitterFollowers": 900,
        "twitterVerified": True,
        "stats": {
            "review": {
                "received": {"positive": 10, "neutral": 2, "negative": 1},
                "given": {"positive": 4, "neutral": 0, "negative": 0},
            },
            "vouch": {
                "given": {"count": 3, "amountWeiTotal": str(2 * WEI_PER_ETH)},
                "received": {"count": 5, "amountWeiTotal": str(WEI_PER_ETH // 2)},
            },
        },
    }
    payload.update(overrides)
    return EnrichedUserRecord.model_validate(payload)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo logger configuration done by CLI invocations."""
    yield
    package_logger = logging.getLogger("ethoscompare")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    clear_cli_context()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(clock: FakeClock) -> CacheStore:
    return CacheStore(profile_ttl=300, search_ttl=30, clock=clock)


@pytest.fixture
def statistics() -> StatisticsCollector:
    return StatisticsCollector()


@pytest.fixture
def mock_client() -> Mock:
    """Mocked Ethos client with one resolvable user, ``alice``.

    ``Mock(spec=EthosClient)`` turns the async methods into AsyncMocks.
    """
    client = Mock(spec=EthosClient)
    client.search_legacy.return_value = [legacy_record("alice")]
    client.get_score_level.return_value = "reputable"
    client.search_users.return_value = [enriched_record("alice")]
    return client


@pytest.fixture
def profile_resolver(
    mock_client: Mock,
    cache_store: CacheStore,
    statistics: StatisticsCollector,
) -> ProfileResolver:
    return ProfileResolver(
        mock_client,
        cache_store,
        ResponseNormalizer(),
        ResolverSettings(),
        statistics=statistics,
    )


@pytest.fixture
def search_resolver(
    mock_client: Mock,
    cache_store: CacheStore,
    statistics: StatisticsCollector,
) -> SearchResolver:
    return SearchResolver(
        mock_client,
        cache_store,
        ResponseNormalizer(),
        SearchSettings(),
        statistics=statistics,
    )


@pytest.fixture
def comparison_service(
    profile_resolver: ProfileResolver,
    search_resolver: SearchResolver,
    cache_store: CacheStore,
    statistics: StatisticsCollector,
) -> ProfileComparisonService:
    return ProfileComparisonService(
        profile_resolver,
        search_resolver,
        cache_store,
        statistics,
    )


@pytest.fixture
def make_legacy_record():
    return legacy_record


@pytest.fixture
def make_enriched_record():
    return enriched_record
