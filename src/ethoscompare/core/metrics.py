"""Display metrics.

``derive_metrics`` turns a profile (or its serialized mapping) into the
display-ready ``DisplayMetrics`` record. ``METRICS`` is the single table
of comparison rows; every consumer reads metric values through it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Any, Callable, Mapping, Union

from ethoscompare.core.models import ReputationLevel, ReviewCounts, UserProfile, VouchStats
from ethoscompare.core.normalization import canonical_amount
from ethoscompare.shared.constants import MetricKeys, UnitConversion

logger = logging.getLogger(__name__)

MetricValue = Union[int, Decimal]


def wei_to_eth(amount: Any) -> Decimal:
    """Exact wei to ETH conversion (10^18 wei per ETH).

    Uses integer division so values beyond 2^53 keep every digit.
    """
    whole, fraction = divmod(int(canonical_amount(amount)), 10**UnitConversion.WEI_DECIMALS)
    fraction_digits = str(fraction).rjust(UnitConversion.WEI_DECIMALS, "0").rstrip("0")
    if not fraction_digits:
        return Decimal(whole)
    return Decimal(f"{whole}.{fraction_digits}")


@dataclass(frozen=True)
class ReviewSummary:
    positive: int = 0
    neutral: int = 0
    negative: int = 0
    total: int = 0

    @classmethod
    def from_counts(cls, counts: ReviewCounts) -> ReviewSummary:
        return cls(
            positive=counts.positive,
            neutral=counts.neutral,
            negative=counts.negative,
            total=counts.total,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
            "total": self.total,
        }


@dataclass(frozen=True)
class DisplayMetrics:
    """Display-ready metrics of one profile."""

    handle: str
    display_name: str
    score: int
    level: ReputationLevel
    total_xp: int
    xp_streak_days: int
    twitter_followers: int
    reviews_received: ReviewSummary
    reviews_given: ReviewSummary
    vouches_given_count: int
    vouches_received_count: int
    vouched_given_eth: Decimal
    vouched_received_eth: Decimal
    is_synthetic: bool = False

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation; ETH amounts are decimal strings."""
        return {
            "handle": self.handle,
            "display_name": self.display_name,
            "score": self.score,
            "level": self.level.value,
            "total_xp": self.total_xp,
            "xp_streak_days": self.xp_streak_days,
            "twitter_followers": self.twitter_followers,
            "reviews_received": self.reviews_received.to_dict(),
            "reviews_given": self.reviews_given.to_dict(),
            "vouches_given_count": self.vouches_given_count,
            "vouches_received_count": self.vouches_received_count,
            "vouched_given_eth": str(self.vouched_given_eth),
            "vouched_received_eth": str(self.vouched_received_eth),
            "is_synthetic": self.is_synthetic,
        }


def _count(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return 0


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _profile_from_mapping(data: Mapping[str, Any]) -> UserProfile:
    """Rebuild a profile from its ``to_dict`` form; missing or malformed fields become defaults."""

    def reviews(value: Any) -> ReviewCounts:
        counts = _mapping(value)
        return ReviewCounts(
            positive=_count(counts.get("positive")),
            neutral=_count(counts.get("neutral")),
            negative=_count(counts.get("negative")),
        )

    def vouches(value: Any) -> tuple[int, str]:
        stats = _mapping(value)
        return _count(stats.get("count")), canonical_amount(stats.get("amount_wei_total"))

    handle = data.get("handle")
    handle = handle if isinstance(handle, str) else ""
    display_name = data.get("display_name")
    given_count, given_amount = vouches(data.get("vouches_given"))
    received_count, received_amount = vouches(data.get("vouches_received"))

    return UserProfile(
        handle=handle,
        display_name=display_name if isinstance(display_name, str) and display_name else handle,
        score=_count(data.get("score")),
        total_xp=_count(data.get("total_xp")),
        xp_streak_days=_count(data.get("xp_streak_days")),
        level=ReputationLevel.parse(data.get("level")),
        twitter_followers=_count(data.get("twitter_followers")),
        reviews_received=reviews(data.get("reviews_received")),
        reviews_given=reviews(data.get("reviews_given")),
        vouches_given=VouchStats(given_count, given_amount),
        vouches_received=VouchStats(received_count, received_amount),
        is_synthetic=data.get("is_synthetic") is True,
    )


def derive_metrics(profile: UserProfile | Mapping[str, Any]) -> DisplayMetrics:
    """Compute display metrics for a profile or its serialized mapping. Never raises."""
    if not isinstance(profile, UserProfile):
        profile = _profile_from_mapping(_mapping(profile))

    return DisplayMetrics(
        handle=profile.handle,
        display_name=profile.display_name,
        score=profile.score,
        level=profile.display_level,
        total_xp=profile.total_xp,
        xp_streak_days=profile.xp_streak_days,
        twitter_followers=profile.twitter_followers,
        reviews_received=ReviewSummary.from_counts(profile.reviews_received),
        reviews_given=ReviewSummary.from_counts(profile.reviews_given),
        vouches_given_count=profile.vouches_given.count,
        vouches_received_count=profile.vouches_received.count,
        vouched_given_eth=wei_to_eth(profile.vouches_given.amount_wei_total),
        vouched_received_eth=wei_to_eth(profile.vouches_received.amount_wei_total),
        is_synthetic=profile.is_synthetic,
    )


class MetricKind(str, Enum):
    """How a metric value is formatted."""

    INTEGER = "integer"
    XP = "xp"
    ETH = "eth"


@dataclass(frozen=True)
class MetricDefinition:
    """One comparison row.

    Attributes:
        key: Stable metric key
        label: Human-readable label
        accessor: Reads the value from DisplayMetrics
        fallback_max: Bar scale used when both compared values are zero
        kind: Formatting kind
    """

    key: str
    label: str
    accessor: Callable[[DisplayMetrics], MetricValue]
    fallback_max: MetricValue
    kind: MetricKind = MetricKind.INTEGER


METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition(MetricKeys.SCORE, "Ethos Score", lambda m: m.score, 2000),
    MetricDefinition(MetricKeys.TOTAL_XP, "Total XP", lambda m: m.total_xp, 100000, MetricKind.XP),
    MetricDefinition(MetricKeys.XP_STREAK_DAYS, "XP Streak Days", lambda m: m.xp_streak_days, 365),
    MetricDefinition(
        MetricKeys.REVIEWS_RECEIVED_TOTAL,
        "Total Reviews (Received)",
        lambda m: m.reviews_received.total,
        1000,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_RECEIVED_POSITIVE,
        "Positive Reviews (Received)",
        lambda m: m.reviews_received.positive,
        500,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_RECEIVED_NEUTRAL,
        "Neutral Reviews (Received)",
        lambda m: m.reviews_received.neutral,
        200,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_RECEIVED_NEGATIVE,
        "Negative Reviews (Received)",
        lambda m: m.reviews_received.negative,
        100,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_GIVEN_TOTAL,
        "Total Reviews (Given)",
        lambda m: m.reviews_given.total,
        1000,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_GIVEN_POSITIVE,
        "Positive Reviews (Given)",
        lambda m: m.reviews_given.positive,
        500,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_GIVEN_NEUTRAL,
        "Neutral Reviews (Given)",
        lambda m: m.reviews_given.neutral,
        200,
    ),
    MetricDefinition(
        MetricKeys.REVIEWS_GIVEN_NEGATIVE,
        "Negative Reviews (Given)",
        lambda m: m.reviews_given.negative,
        100,
    ),
    MetricDefinition(MetricKeys.VOUCHES_GIVEN, "Vouches (Given)", lambda m: m.vouches_given_count, 500),
    MetricDefinition(
        MetricKeys.VOUCHES_RECEIVED,
        "Vouches (Received)",
        lambda m: m.vouches_received_count,
        500,
    ),
    MetricDefinition(
        MetricKeys.ETH_VOUCHED_GIVEN,
        "ETH Vouch (Given)",
        lambda m: m.vouched_given_eth,
        Decimal(100),
        MetricKind.ETH,
    ),
    MetricDefinition(
        MetricKeys.ETH_VOUCHED_RECEIVED,
        "ETH Vouch (Received)",
        lambda m: m.vouched_received_eth,
        Decimal(100),
        MetricKind.ETH,
    ),
)

METRICS_BY_KEY: dict[str, MetricDefinition] = {metric.key: metric for metric in METRICS}


def get_metric(key: str) -> MetricDefinition:
    """Look up a metric definition.

    Raises:
        KeyError: If ``key`` is not a known metric
    """
    try:
        return METRICS_BY_KEY[key]
    except KeyError:
        msg = f"Unknown metric: {key}"
        raise KeyError(msg) from None


def metric_value(metrics: DisplayMetrics, key: str) -> MetricValue:
    return get_metric(key).accessor(metrics)


class ComparisonOutcome(str, Enum):
    """Which side wins a metric row."""

    LEFT = "left"
    RIGHT = "right"
    DRAW = "draw"


@dataclass(frozen=True)
class MetricComparison:
    """Side-by-side values of one metric row.

    Ratios are each side's value relative to ``relative_max`` (in [0, 1]),
    suitable as bar widths.
    """

    key: str
    label: str
    left: MetricValue
    right: MetricValue
    relative_max: MetricValue
    left_ratio: float
    right_ratio: float
    outcome: ComparisonOutcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "left": _json_value(self.left),
            "right": _json_value(self.right),
            "relative_max": _json_value(self.relative_max),
            "left_ratio": self.left_ratio,
            "right_ratio": self.right_ratio,
            "outcome": self.outcome.value,
        }


def _json_value(value: MetricValue) -> int | str:
    return str(value) if isinstance(value, Decimal) else value


def _ratio(value: MetricValue, maximum: MetricValue) -> float:
    if maximum <= 0:
        return 0.0
    return float(min(max(Decimal(value) / Decimal(maximum), Decimal(0)), Decimal(1)))


def compare_metric(
    metric: MetricDefinition,
    left: DisplayMetrics,
    right: DisplayMetrics,
) -> MetricComparison:
    left_value = metric.accessor(left)
    right_value = metric.accessor(right)
    relative_max = max(left_value, right_value)
    if relative_max <= 0:
        relative_max = metric.fallback_max

    if left_value > right_value:
        outcome = ComparisonOutcome.LEFT
    elif right_value > left_value:
        outcome = ComparisonOutcome.RIGHT
    else:
        outcome = ComparisonOutcome.DRAW

    return MetricComparison(
        key=metric.key,
        label=metric.label,
        left=left_value,
        right=right_value,
        relative_max=relative_max,
        left_ratio=_ratio(left_value, relative_max),
        right_ratio=_ratio(right_value, relative_max),
        outcome=outcome,
    )


def compare_metrics(left: DisplayMetrics, right: DisplayMetrics) -> list[MetricComparison]:
    """Compare two metric records row by row, in table order."""
    return [compare_metric(metric, left, right) for metric in METRICS]


def _two_places(amount: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(UnitConversion.ETH_DISPLAY_QUANTUM, rounding=ROUND_HALF_UP)


def _abbreviate(value: MetricValue) -> str:
    amount = Decimal(value)
    if amount < 1_000:
        return str(value)
    # Promote to millions when thousands round up to 1000.00k
    scaled = _two_places(amount / 1_000)
    if scaled < 1_000:
        return f"{scaled}k"
    return f"{_two_places(amount / 1_000_000)}m"


def format_metric(key: str, value: MetricValue) -> str:
    """Display string of a metric value.

    ETH amounts get two decimals, XP is abbreviated with ``k``/``m`` and
    two decimals from one thousand upwards, integers are printed plainly.
    """
    kind = get_metric(key).kind
    if kind is MetricKind.ETH:
        return str(_two_places(Decimal(value)))
    if kind is MetricKind.XP:
        return _abbreviate(value)
    return str(value)
