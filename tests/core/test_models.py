"""Tests for the core domain models."""

import pytest

from ethoscompare.core.models import (
    ReputationLevel,
    ReviewCounts,
    SearchCandidate,
    UserProfile,
    level_for_score,
)


class TestReputationLevel:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("reputable", ReputationLevel.REPUTABLE),
            (" Exemplary ", ReputationLevel.EXEMPLARY),
            ("legendary", ReputationLevel.UNKNOWN),
            ("", ReputationLevel.UNKNOWN),
            (None, ReputationLevel.UNKNOWN),
            (3, ReputationLevel.UNKNOWN),
        ],
    )
    def test_parse(self, value, expected):
        assert ReputationLevel.parse(value) is expected

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (0, ReputationLevel.UNTRUSTED),
            (799, ReputationLevel.UNTRUSTED),
            (800, ReputationLevel.QUESTIONABLE),
            (1200, ReputationLevel.NEUTRAL),
            (1599, ReputationLevel.NEUTRAL),
            (1600, ReputationLevel.REPUTABLE),
            (2000, ReputationLevel.EXEMPLARY),
            (2800, ReputationLevel.EXEMPLARY),
        ],
    )
    def test_level_for_score(self, score, expected):
        assert level_for_score(score) is expected


class TestUserProfile:
    def test_display_level_prefers_upstream_tier(self):
        profile = UserProfile(handle="a", score=100, level=ReputationLevel.EXEMPLARY)

        assert profile.display_level is ReputationLevel.EXEMPLARY

    def test_display_level_falls_back_to_score_bracket(self):
        profile = UserProfile(handle="a", score=1700)

        assert profile.display_level is ReputationLevel.REPUTABLE

    def test_synthetic_profile_stays_unknown(self):
        profile = UserProfile(handle="a", is_synthetic=True)

        assert profile.display_level is ReputationLevel.UNKNOWN

    def test_to_dict(self):
        profile = UserProfile(
            handle="alice",
            display_name="Alice",
            reviews_received=ReviewCounts(positive=2, neutral=1, negative=0),
        )

        data = profile.to_dict()

        assert data["handle"] == "alice"
        assert data["level"] == "unknown"
        assert data["reviews_received"] == {
            "positive": 2,
            "neutral": 1,
            "negative": 0,
            "total": 3,
        }
        assert data["vouches_given"] == {"count": 0, "amount_wei_total": "0"}
        assert data["profile_id"] is None


class TestSearchCandidate:
    def test_has_profile_id(self):
        assert SearchCandidate(handle="a", profile_id=3).has_profile_id is True
        assert SearchCandidate(handle="a").has_profile_id is False

    def test_to_dict(self):
        data = SearchCandidate(handle="a", score=5).to_dict()

        assert data["handle"] == "a"
        assert data["score"] == 5
        assert data["profile_id"] is None
