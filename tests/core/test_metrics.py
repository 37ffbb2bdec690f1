"""Tests for display metrics, the metric table and comparison rows."""

from decimal import Decimal

import pytest

from ethoscompare.core.metrics import (
    METRICS,
    ComparisonOutcome,
    MetricKind,
    compare_metric,
    compare_metrics,
    derive_metrics,
    format_metric,
    get_metric,
    metric_value,
    wei_to_eth,
)
from ethoscompare.core.models import (
    ReputationLevel,
    ReviewCounts,
    UserProfile,
    VouchStats,
)
from ethoscompare.shared.constants import MetricKeys

WEI = 10**18


def _profile(**overrides) -> UserProfile:
    values = {
        "handle": "alice",
        "display_name": "Alice",
        "score": 1500,
        "total_xp": 2500,
        "xp_streak_days": 4,
        "level": ReputationLevel.NEUTRAL,
        "reviews_received": ReviewCounts(positive=10, neutral=3, negative=2),
        "reviews_given": ReviewCounts(positive=1, neutral=0, negative=1),
        "vouches_given": VouchStats(count=2, amount_wei_total=str(2 * WEI)),
        "vouches_received": VouchStats(count=1, amount_wei_total="1500000000000000000"),
    }
    values.update(overrides)
    return UserProfile(**values)


class TestWeiToEth:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (str(2 * WEI), Decimal(2)),
            ("1500000000000000000", Decimal("1.5")),
            ("1", Decimal("0.000000000000000001")),
            ("0", Decimal(0)),
            ("malformed", Decimal(0)),
        ],
    )
    def test_conversion(self, amount, expected):
        assert wei_to_eth(amount) == expected

    def test_exact_beyond_float_precision(self):
        amount = str(2**60 * WEI + 1)

        result = wei_to_eth(amount)

        assert result == Decimal(f"{2**60}.000000000000000001")
        assert str(result).endswith("000000000000000001")


class TestDeriveMetrics:
    def test_totals_and_eth(self):
        metrics = derive_metrics(_profile())

        assert metrics.reviews_received.total == 15
        assert metrics.reviews_given.total == 2
        assert metrics.vouched_given_eth == Decimal(2)
        assert metrics.vouched_received_eth == Decimal("1.5")
        assert metrics.vouches_given_count == 2
        assert metrics.level is ReputationLevel.NEUTRAL

    def test_unknown_level_uses_score_bracket(self):
        metrics = derive_metrics(_profile(level=ReputationLevel.UNKNOWN, score=2100))

        assert metrics.level is ReputationLevel.EXEMPLARY

    def test_mapping_input_matches_profile_input(self):
        profile = _profile()

        assert derive_metrics(profile.to_dict()) == derive_metrics(profile)

    def test_malformed_mapping_never_raises(self):
        metrics = derive_metrics(
            {
                "handle": "bob",
                "score": "lots",
                "reviews_received": {"positive": -1, "neutral": "2"},
                "vouches_given": {"count": 1, "amount_wei_total": 3.5},
                "level": 7,
            }
        )

        assert metrics.handle == "bob"
        assert metrics.display_name == "bob"
        assert metrics.score == 0
        assert metrics.reviews_received.total == 0
        assert metrics.vouched_given_eth == Decimal(0)
        assert metrics.vouches_given_count == 1

    def test_non_mapping_input_gives_empty_metrics(self):
        metrics = derive_metrics(None)

        assert metrics.handle == ""
        assert metrics.score == 0

    def test_to_dict_serializes_eth_as_string(self):
        data = derive_metrics(_profile()).to_dict()

        assert data["vouched_given_eth"] == "2"
        assert data["vouched_received_eth"] == "1.5"
        assert data["level"] == "neutral"


class TestMetricTable:
    def test_table_covers_all_rows_in_order(self):
        keys = [metric.key for metric in METRICS]

        assert keys[0] == MetricKeys.SCORE
        assert keys[-1] == MetricKeys.ETH_VOUCHED_RECEIVED
        assert len(keys) == len(set(keys)) == 15

    def test_unknown_metric_raises_key_error(self):
        with pytest.raises(KeyError, match="Unknown metric"):
            get_metric("karma")

    def test_metric_value(self):
        metrics = derive_metrics(_profile())

        assert metric_value(metrics, MetricKeys.REVIEWS_RECEIVED_NEGATIVE) == 2
        assert metric_value(metrics, MetricKeys.ETH_VOUCHED_GIVEN) == Decimal(2)

    def test_eth_rows_use_eth_kind(self):
        assert get_metric(MetricKeys.ETH_VOUCHED_GIVEN).kind is MetricKind.ETH
        assert get_metric(MetricKeys.TOTAL_XP).kind is MetricKind.XP


class TestCompareMetric:
    def test_winner_and_ratios(self):
        left = derive_metrics(_profile(score=1000))
        right = derive_metrics(_profile(score=2000))

        row = compare_metric(get_metric(MetricKeys.SCORE), left, right)

        assert row.outcome is ComparisonOutcome.RIGHT
        assert row.relative_max == 2000
        assert row.left_ratio == 0.5
        assert row.right_ratio == 1.0

    def test_both_zero_uses_fallback_max(self):
        left = derive_metrics(_profile(xp_streak_days=0))
        right = derive_metrics(_profile(xp_streak_days=0))

        row = compare_metric(get_metric(MetricKeys.XP_STREAK_DAYS), left, right)

        assert row.outcome is ComparisonOutcome.DRAW
        assert row.relative_max == 365
        assert row.left_ratio == 0.0

    def test_eth_rows_compare_decimals(self):
        left = derive_metrics(_profile())
        right = derive_metrics(_profile(vouches_given=VouchStats(1, "1")))

        row = compare_metric(get_metric(MetricKeys.ETH_VOUCHED_GIVEN), left, right)

        assert row.outcome is ComparisonOutcome.LEFT
        assert row.to_dict()["left"] == "2"

    def test_compare_metrics_returns_every_row(self):
        metrics = derive_metrics(_profile())

        rows = compare_metrics(metrics, metrics)

        assert len(rows) == len(METRICS)
        assert all(row.outcome is ComparisonOutcome.DRAW for row in rows)


class TestFormatMetric:
    @pytest.mark.parametrize(
        ("key", "value", "expected"),
        [
            (MetricKeys.ETH_VOUCHED_GIVEN, Decimal(2), "2.00"),
            (MetricKeys.ETH_VOUCHED_GIVEN, Decimal("0.005"), "0.01"),
            (MetricKeys.ETH_VOUCHED_RECEIVED, Decimal("1.234"), "1.23"),
            (MetricKeys.TOTAL_XP, 999, "999"),
            (MetricKeys.TOTAL_XP, 12345, "12.35k"),
            (MetricKeys.TOTAL_XP, 1500000, "1.50m"),
            (MetricKeys.TOTAL_XP, 999_994, "999.99k"),
            (MetricKeys.TOTAL_XP, 999_999, "1.00m"),
            (MetricKeys.SCORE, 1500, "1500"),
        ],
    )
    def test_format(self, key, value, expected):
        assert format_metric(key, value) == expected
