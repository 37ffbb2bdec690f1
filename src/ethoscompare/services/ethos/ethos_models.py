"""Ethos API Response Models.

Lenient pydantic models for the three upstream payload shapes. The
upstream is inconsistent, so these models never reject a record: unknown
fields are ignored and malformed values are replaced by defaults (empty
string, zero, None). Vouch amounts are kept as received; the response
normalizer canonicalizes them without floating point.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if value is not None:
        logger.debug("Malformed upstream string %r replaced with ''", value)
    return ""


def _as_count(value: Any) -> int:
    """Non-negative integer, or 0 for anything else."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value >= 0 else 0
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and value >= 0:
        return int(value)
    if value is not None:
        logger.debug("Malformed upstream count %r replaced with 0", value)
    return 0


def _as_mapping(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else {}


def _as_records(value: Any) -> list[Any]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


class _UpstreamModel(BaseModel):
    """Base configuration for upstream payloads."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class PolarityCounts(_UpstreamModel):
    """Review counts by polarity."""

    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @field_validator("positive", "neutral", "negative", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return _as_count(value)


class ReviewStats(_UpstreamModel):
    received: PolarityCounts = Field(default_factory=PolarityCounts)
    given: PolarityCounts = Field(default_factory=PolarityCounts)

    @field_validator("received", "given", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Any:
        return _as_mapping(value)


class VouchTotals(_UpstreamModel):
    """Vouch count and raw smallest-unit amount for one direction."""

    count: int = 0
    amount_wei_total: Any = Field(default="0", alias="amountWeiTotal")

    @field_validator("count", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return _as_count(value)


class VouchStatsRecord(_UpstreamModel):
    given: VouchTotals = Field(default_factory=VouchTotals)
    received: VouchTotals = Field(default_factory=VouchTotals)

    @field_validator("given", "received", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Any:
        return _as_mapping(value)


class UserStats(_UpstreamModel):
    review: ReviewStats = Field(default_factory=ReviewStats)
    vouch: VouchStatsRecord = Field(default_factory=VouchStatsRecord)

    @field_validator("review", "vouch", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> Any:
        return _as_mapping(value)


class LegacySearchRecord(_UpstreamModel):
    """One record of the legacy (v1) search endpoint."""

    username: str = ""
    name: str = ""
    avatar: str = ""
    description: str = ""
    userkey: str = ""
    primary_address: str = Field(default="", alias="primaryAddress")
    score: int = 0
    profile_id: int | None = Field(default=None, alias="profileId")

    @field_validator(
        "username",
        "name",
        "avatar",
        "description",
        "userkey",
        "primary_address",
        mode="before",
    )
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return _as_str(value)

    @field_validator("score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> int:
        return _as_count(value)

    @field_validator("profile_id", mode="before")
    @classmethod
    def _coerce_profile_id(cls, value: Any) -> int | None:
        # 0 and non-numeric identifiers count as "no stable identifier"
        if isinstance(value, str) and value.isascii() and value.isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            return value
        return None


class LegacySearchData(_UpstreamModel):
    values: list[LegacySearchRecord] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, value: Any) -> list[Any]:
        return _as_records(value)


class LegacySearchResponse(_UpstreamModel):
    """``GET /search`` response envelope."""

    ok: bool = False
    data: LegacySearchData = Field(default_factory=LegacySearchData)

    @field_validator("ok", mode="before")
    @classmethod
    def _coerce_ok(cls, value: Any) -> bool:
        return value is True

    @field_validator("data", mode="before")
    @classmethod
    def _coerce_data(cls, value: Any) -> Any:
        return _as_mapping(value)


class EnrichedUserRecord(_UpstreamModel):
    """One record of the enriched (v2) user search endpoint."""

    username: str = ""
    display_name: str = Field(default="", alias="displayName")
    avatar_url: str = Field(default="", alias="avatarUrl")
    description: str = ""
    score: int = 0
    xp_total: int = Field(default=0, alias="xpTotal")
    xp_streak_days: int = Field(default=0, alias="xpStreakDays")
    twitter_followers: int = Field(default=0, alias="twitterFollowers")
    twitter_verified: bool = Field(default=False, alias="twitterVerified")
    stats: UserStats = Field(default_factory=UserStats)

    @field_validator("username", "display_name", "avatar_url", "description", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return _as_str(value)

    @field_validator(
        "score",
        "xp_total",
        "xp_streak_days",
        "twitter_followers",
        mode="before",
    )
    @classmethod
    def _coerce_count(cls, value: Any) -> int:
        return _as_count(value)

    @field_validator("twitter_verified", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return value is True

    @field_validator("stats", mode="before")
    @classmethod
    def _coerce_stats(cls, value: Any) -> Any:
        return _as_mapping(value)


class EnrichedSearchResponse(_UpstreamModel):
    """``GET /users/search`` response envelope."""

    values: list[EnrichedUserRecord] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, value: Any) -> list[Any]:
        return _as_records(value)


class ScoreLevelResponse(_UpstreamModel):
    """``GET /score/userkey`` response."""

    level: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> str:
        return _as_str(value)


__all__ = [
    "EnrichedSearchResponse",
    "EnrichedUserRecord",
    "LegacySearchData",
    "LegacySearchRecord",
    "LegacySearchResponse",
    "PolarityCounts",
    "ReviewStats",
    "ScoreLevelResponse",
    "UserStats",
    "VouchStatsRecord",
    "VouchTotals",
]
