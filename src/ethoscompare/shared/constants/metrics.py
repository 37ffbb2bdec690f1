"""
Metrics Constants

Unit conversion, score brackets and metric keys shared by the metrics
aggregator, the comparison service and the CLI.
"""

from decimal import Decimal


class UnitConversion:
    """Smallest-unit to display-unit conversion."""

    WEI_DECIMALS = 18
    WEI_PER_ETH = Decimal(10) ** WEI_DECIMALS
    ETH_DISPLAY_QUANTUM = Decimal("0.01")


class ScoreBrackets:
    """Lower score bounds of the reputation brackets."""

    QUESTIONABLE = 800
    NEUTRAL = 1200
    REPUTABLE = 1600
    EXEMPLARY = 2000


class MetricKeys:
    """Keys of the comparison metric table."""

    SCORE = "score"
    TOTAL_XP = "total_xp"
    XP_STREAK_DAYS = "xp_streak_days"
    REVIEWS_RECEIVED_TOTAL = "reviews_received_total"
    REVIEWS_RECEIVED_POSITIVE = "reviews_received_positive"
    REVIEWS_RECEIVED_NEUTRAL = "reviews_received_neutral"
    REVIEWS_RECEIVED_NEGATIVE = "reviews_received_negative"
    REVIEWS_GIVEN_TOTAL = "reviews_given_total"
    REVIEWS_GIVEN_POSITIVE = "reviews_given_positive"
    REVIEWS_GIVEN_NEUTRAL = "reviews_given_neutral"
    REVIEWS_GIVEN_NEGATIVE = "reviews_given_negative"
    VOUCHES_GIVEN = "vouches_given"
    VOUCHES_RECEIVED = "vouches_received"
    ETH_VOUCHED_GIVEN = "eth_vouched_given"
    ETH_VOUCHED_RECEIVED = "eth_vouched_received"
