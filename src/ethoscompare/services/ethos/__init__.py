"""Ethos API client package."""

from __future__ import annotations

from .ethos_client import EthosClient, create_session
from .ethos_models import (
    EnrichedSearchResponse,
    EnrichedUserRecord,
    LegacySearchRecord,
    LegacySearchResponse,
    PolarityCounts,
    ScoreLevelResponse,
    UserStats,
    VouchTotals,
)

__all__ = [
    "EnrichedSearchResponse",
    "EnrichedUserRecord",
    "EthosClient",
    "LegacySearchRecord",
    "LegacySearchResponse",
    "PolarityCounts",
    "ScoreLevelResponse",
    "UserStats",
    "VouchTotals",
    "create_session",
]
