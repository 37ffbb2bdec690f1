"""Core domain models.

Frozen dataclasses for the canonical user record and the search candidate
shape. Every consumer (metrics, comparison, CLI, export) works on these
types only; upstream payload shapes stop at the response normalizer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ethoscompare.shared.constants import ScoreBrackets


class ReputationLevel(str, Enum):
    """Coarse reputation tier."""

    UNKNOWN = "unknown"
    UNTRUSTED = "untrusted"
    QUESTIONABLE = "questionable"
    NEUTRAL = "neutral"
    REPUTABLE = "reputable"
    EXEMPLARY = "exemplary"

    @classmethod
    def parse(cls, value: object) -> ReputationLevel:
        """Map an upstream level string to a tier; unrecognized values are UNKNOWN."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.UNKNOWN


def level_for_score(score: int) -> ReputationLevel:
    """Score bracket of ``score``.

    Used for display when the upstream tier is unknown.
    """
    if score < ScoreBrackets.QUESTIONABLE:
        return ReputationLevel.UNTRUSTED
    if score < ScoreBrackets.NEUTRAL:
        return ReputationLevel.QUESTIONABLE
    if score < ScoreBrackets.REPUTABLE:
        return ReputationLevel.NEUTRAL
    if score < ScoreBrackets.EXEMPLARY:
        return ReputationLevel.REPUTABLE
    return ReputationLevel.EXEMPLARY


@dataclass(frozen=True)
class ReviewCounts:
    """Review counts by polarity."""

    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative

    def to_dict(self) -> dict[str, int]:
        return {
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
            "total": self.total,
        }


@dataclass(frozen=True)
class VouchStats:
    """Vouch count and value in wei (canonical non-negative integer string)."""

    count: int = 0
    amount_wei_total: str = "0"

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "amount_wei_total": self.amount_wei_total}


@dataclass(frozen=True)
class UserProfile:
    """Canonical user record produced by the response normalizer.

    Attributes:
        handle: Public username, unique case-insensitively
        display_name: Display name (falls back to the handle)
        avatar_url: Avatar image URL, may be empty
        bio: Profile description, may be empty
        userkey: Internal user key used for tier lookups, may be empty
        profile_id: Stable profile identifier, None for identifier-less records
        score: Reputation score
        total_xp: Total experience points
        xp_streak_days: Current XP streak in days
        level: Reputation tier
        twitter_followers: Follower count of the linked account
        twitter_verified: Whether the linked account is verified
        reviews_received: Reviews received by polarity
        reviews_given: Reviews given by polarity
        vouches_given: Vouches given
        vouches_received: Vouches received
        is_synthetic: True for offline placeholder profiles
    """

    handle: str
    display_name: str = ""
    avatar_url: str = ""
    bio: str = ""
    userkey: str = ""
    profile_id: int | None = None
    score: int = 0
    total_xp: int = 0
    xp_streak_days: int = 0
    level: ReputationLevel = ReputationLevel.UNKNOWN
    twitter_followers: int = 0
    twitter_verified: bool = False
    reviews_received: ReviewCounts = field(default_factory=ReviewCounts)
    reviews_given: ReviewCounts = field(default_factory=ReviewCounts)
    vouches_given: VouchStats = field(default_factory=VouchStats)
    vouches_received: VouchStats = field(default_factory=VouchStats)
    is_synthetic: bool = False

    @property
    def display_level(self) -> ReputationLevel:
        """Upstream tier, or the score bracket when the tier is unknown."""
        if self.level is ReputationLevel.UNKNOWN and not self.is_synthetic:
            return level_for_score(self.score)
        return self.level

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation."""
        return {
            "handle": self.handle,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "bio": self.bio,
            "userkey": self.userkey,
            "profile_id": self.profile_id,
            "score": self.score,
            "total_xp": self.total_xp,
            "xp_streak_days": self.xp_streak_days,
            "level": self.level.value,
            "twitter_followers": self.twitter_followers,
            "twitter_verified": self.twitter_verified,
            "reviews_received": self.reviews_received.to_dict(),
            "reviews_given": self.reviews_given.to_dict(),
            "vouches_given": self.vouches_given.to_dict(),
            "vouches_received": self.vouches_received.to_dict(),
            "is_synthetic": self.is_synthetic,
        }


@dataclass(frozen=True)
class SearchCandidate:
    """Typeahead search result."""

    handle: str
    display_name: str = ""
    avatar_url: str = ""
    score: int = 0
    userkey: str = ""
    profile_id: int | None = None
    bio: str = ""
    primary_address: str = ""

    @property
    def has_profile_id(self) -> bool:
        return self.profile_id is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "handle": self.handle,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "score": self.score,
            "userkey": self.userkey,
            "profile_id": self.profile_id,
            "bio": self.bio,
            "primary_address": self.primary_address,
        }
