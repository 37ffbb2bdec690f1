"""Response normalization.

Maps the heterogeneous upstream records (legacy v1 search record, the
optional enriched v2 user record, the tier lookup) into one canonical
``UserProfile``.

Per-field precedence: enriched value when present and non-default, then
the legacy value, then the default (0, "" or ``unknown``). Wei amounts
are canonicalized with integer arithmetic only.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from ethoscompare.core.models import (
    ReputationLevel,
    ReviewCounts,
    SearchCandidate,
    UserProfile,
    VouchStats,
)
from ethoscompare.services.ethos.ethos_models import (
    EnrichedUserRecord,
    LegacySearchRecord,
    PolarityCounts,
    VouchTotals,
)
from ethoscompare.shared.constants import SearchConfig

logger = logging.getLogger(__name__)

V = TypeVar("V", str, int, bool)


def canonical_amount(value: Any) -> str:
    """Canonical non-negative integer string for a wei amount.

    Integers and ASCII digit strings are accepted ("007" becomes "7").
    Floats, negatives and anything else are malformed and become "0".
    """
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return str(value)
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            try:
                return str(int(text))
            except ValueError:
                # Beyond the interpreter's integer string conversion limit
                pass
    if value not in (None, ""):
        logger.debug("Malformed upstream amount %r replaced with '0'", value)
    return "0"


def _prefer(enriched: V | None, legacy: V, default: V) -> V:
    """First value that is present and differs from the default."""
    if enriched is not None and enriched != default:
        return enriched
    if legacy != default:
        return legacy
    return default


def _review_counts(counts: PolarityCounts) -> ReviewCounts:
    return ReviewCounts(
        positive=counts.positive,
        neutral=counts.neutral,
        negative=counts.negative,
    )


def _vouch_stats(totals: VouchTotals) -> VouchStats:
    return VouchStats(
        count=totals.count,
        amount_wei_total=canonical_amount(totals.amount_wei_total),
    )


class ResponseNormalizer:
    """Builds canonical records from upstream records. Never raises."""

    def normalize(
        self,
        candidate: LegacySearchRecord,
        enriched: EnrichedUserRecord | None = None,
        level: ReputationLevel = ReputationLevel.UNKNOWN,
    ) -> UserProfile:
        """Merge a legacy candidate with its optional enriched record.

        Args:
            candidate: Record chosen from the legacy search
            enriched: Matching enriched record, if the lookup succeeded
            level: Tier from the score lookup (UNKNOWN if it failed)

        Returns:
            The canonical UserProfile
        """
        handle = _prefer(enriched.username if enriched else None, candidate.username, "")
        display_name = _prefer(
            enriched.display_name if enriched else None,
            candidate.name,
            "",
        )

        if enriched is None:
            return UserProfile(
                handle=handle,
                display_name=display_name or handle,
                avatar_url=candidate.avatar,
                bio=candidate.description,
                userkey=candidate.userkey,
                profile_id=candidate.profile_id,
                score=candidate.score,
                level=level,
            )

        stats = enriched.stats
        return UserProfile(
            handle=handle,
            display_name=display_name or handle,
            avatar_url=_prefer(enriched.avatar_url, candidate.avatar, ""),
            bio=_prefer(enriched.description, candidate.description, ""),
            userkey=candidate.userkey,
            profile_id=candidate.profile_id,
            score=_prefer(enriched.score, candidate.score, 0),
            total_xp=enriched.xp_total,
            xp_streak_days=enriched.xp_streak_days,
            level=level,
            twitter_followers=enriched.twitter_followers,
            twitter_verified=enriched.twitter_verified,
            reviews_received=_review_counts(stats.review.received),
            reviews_given=_review_counts(stats.review.given),
            vouches_given=_vouch_stats(stats.vouch.given),
            vouches_received=_vouch_stats(stats.vouch.received),
        )

    def synthetic_profile(self, handle: str) -> UserProfile:
        """Deterministic placeholder used when the network is unreachable."""
        return UserProfile(
            handle=handle,
            display_name=handle,
            level=ReputationLevel.UNKNOWN,
            is_synthetic=True,
        )

    def candidate_from_record(self, record: LegacySearchRecord) -> SearchCandidate:
        """Map a legacy search record to the typeahead candidate shape."""
        return SearchCandidate(
            handle=record.username,
            display_name=record.name,
            avatar_url=record.avatar,
            score=record.score,
            userkey=record.userkey,
            profile_id=record.profile_id,
            bio=record.description,
            primary_address=record.primary_address,
        )


def clean_handle(text: str) -> str:
    """Strip surrounding whitespace and one leading ``@`` from user input."""
    cleaned = text.strip()
    if cleaned.startswith(SearchConfig.HANDLE_PREFIX):
        cleaned = cleaned[len(SearchConfig.HANDLE_PREFIX) :].strip()
    return cleaned
