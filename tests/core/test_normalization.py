"""Tests for the response normalizer."""

import pytest

from ethoscompare.core.models import ReputationLevel
from ethoscompare.core.normalization import (
    ResponseNormalizer,
    canonical_amount,
    clean_handle,
)


class TestCanonicalAmount:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (15, "15"),
            ("007", "7"),
            (" 42 ", "42"),
            ("123456789012345678901234567890", "123456789012345678901234567890"),
        ],
    )
    def test_valid_amounts(self, value, expected):
        assert canonical_amount(value) == expected

    @pytest.mark.parametrize("value", [None, "", -1, 1.5, "1e18", "-5", "abc", True, "١٢"])
    def test_malformed_amounts_become_zero(self, value):
        assert canonical_amount(value) == "0"


class TestCleanHandle:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("alice", "alice"),
            ("  alice ", "alice"),
            ("@alice", "alice"),
            (" @ alice", "alice"),
            ("@@alice", "@alice"),
            ("   ", ""),
        ],
    )
    def test_clean_handle(self, text, expected):
        assert clean_handle(text) == expected


class TestNormalize:
    """Per-field precedence: enriched, then legacy, then default."""

    def test_legacy_only(self, make_legacy_record):
        normalizer = ResponseNormalizer()
        candidate = make_legacy_record("alice", name="", score=900)

        profile = normalizer.normalize(candidate)

        assert profile.handle == "alice"
        assert profile.display_name == "alice"
        assert profile.score == 900
        assert profile.profile_id == 42
        assert profile.total_xp == 0
        assert profile.level is ReputationLevel.UNKNOWN
        assert profile.vouches_given.amount_wei_total == "0"
        assert profile.is_synthetic is False

    def test_enriched_values_take_precedence(self, make_legacy_record, make_enriched_record):
        normalizer = ResponseNormalizer()

        profile = normalizer.normalize(
            make_legacy_record("alice"),
            make_enriched_record("alice"),
            ReputationLevel.REPUTABLE,
        )

        assert profile.display_name == "Alice Enriched"
        assert profile.avatar_url == "https://cdn.example/alice.png"
        assert profile.bio == "enriched bio"
        assert profile.score == 1650
        assert profile.total_xp == 12345
        assert profile.xp_streak_days == 12
        assert profile.twitter_followers == 900
        assert profile.twitter_verified is True
        assert profile.level is ReputationLevel.REPUTABLE
        assert profile.reviews_received.total == 13
        assert profile.reviews_given.positive == 4
        assert profile.vouches_given.count == 3
        assert profile.vouches_given.amount_wei_total == str(2 * 10**18)
        # Identity always comes from the legacy record
        assert profile.userkey == "service:x.com:alice"
        assert profile.profile_id == 42

    def test_empty_enriched_values_fall_back_to_legacy(
        self, make_legacy_record, make_enriched_record
    ):
        normalizer = ResponseNormalizer()

        profile = normalizer.normalize(
            make_legacy_record("alice", score=1400),
            make_enriched_record("alice", displayName="", avatarUrl=None, score=0, description=""),
        )

        assert profile.display_name == "Alice"
        assert profile.avatar_url == "https://img.example/alice.png"
        assert profile.bio == "alice builds things"
        assert profile.score == 1400

    def test_wei_amount_above_float_precision_kept_exactly(
        self, make_legacy_record, make_enriched_record
    ):
        # 2^53 + 1 cannot be represented by a float
        amount = str(2**53 + 1) + "000"
        enriched = make_enriched_record(
            "alice",
            stats={"vouch": {"received": {"count": 1, "amountWeiTotal": amount}}},
        )

        profile = ResponseNormalizer().normalize(make_legacy_record("alice"), enriched)

        assert profile.vouches_received.amount_wei_total == amount

    def test_numeric_amount_accepted(self, make_legacy_record, make_enriched_record):
        enriched = make_enriched_record(
            "alice",
            stats={"vouch": {"given": {"count": 1, "amountWeiTotal": 10**20}}},
        )

        profile = ResponseNormalizer().normalize(make_legacy_record("alice"), enriched)

        assert profile.vouches_given.amount_wei_total == str(10**20)

    def test_malformed_amount_becomes_zero(self, make_legacy_record, make_enriched_record):
        enriched = make_enriched_record(
            "alice",
            stats={"vouch": {"given": {"count": 1, "amountWeiTotal": "12.5"}}},
        )

        profile = ResponseNormalizer().normalize(make_legacy_record("alice"), enriched)

        assert profile.vouches_given.amount_wei_total == "0"


class TestSyntheticAndCandidates:
    def test_synthetic_profile(self):
        profile = ResponseNormalizer().synthetic_profile("ghost")

        assert profile.handle == "ghost"
        assert profile.display_name == "ghost"
        assert profile.is_synthetic is True
        assert profile.score == 0
        assert profile.level is ReputationLevel.UNKNOWN

    def test_synthetic_profile_is_deterministic(self):
        normalizer = ResponseNormalizer()

        assert normalizer.synthetic_profile("ghost") == normalizer.synthetic_profile("ghost")

    def test_candidate_from_record(self, make_legacy_record):
        candidate = ResponseNormalizer().candidate_from_record(make_legacy_record("alice"))

        assert candidate.handle == "alice"
        assert candidate.display_name == "Alice"
        assert candidate.profile_id == 42
        assert candidate.bio == "alice builds things"
        assert candidate.primary_address.startswith("0x")
