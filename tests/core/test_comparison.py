"""Tests for the profile comparison service."""

import pytest

from ethoscompare.core.metrics import ComparisonOutcome
from ethoscompare.shared.constants import MetricKeys
from ethoscompare.shared.errors import ErrorCode, TransportDegradedError


@pytest.fixture
def two_users(mock_client, make_legacy_record, make_enriched_record):
    """Upstream knows ``alice`` (enriched) and ``bob`` (legacy only, higher score)."""

    async def search_legacy(query, limit):
        records = {
            "alice": [make_legacy_record("alice", score=1400)],
            "bob": [make_legacy_record("bob", score=1900, profileId=7)],
        }
        return records.get(query.lower(), [])

    async def search_users(query):
        return [make_enriched_record("alice")] if query == "alice" else []

    mock_client.search_legacy.side_effect = search_legacy
    mock_client.search_users.side_effect = search_users
    return mock_client


class TestCompare:
    @pytest.mark.asyncio
    async def test_both_slots_resolved(self, comparison_service, two_users):
        # When
        comparison = await comparison_service.compare("alice", "@bob")

        # Then
        assert comparison.ready is True
        assert comparison.left.handle == "alice"
        assert comparison.right.handle == "bob"
        rows = {row.key: row for row in comparison.metrics}
        assert rows[MetricKeys.SCORE].outcome is ComparisonOutcome.RIGHT
        assert rows[MetricKeys.TOTAL_XP].outcome is ComparisonOutcome.LEFT
        assert sum(comparison.tally().values()) == len(comparison.metrics)

    @pytest.mark.asyncio
    async def test_unresolved_slot_carries_error(self, comparison_service, two_users):
        comparison = await comparison_service.compare("alice", "nobody")

        assert comparison.ready is False
        assert comparison.left.resolved is True
        assert comparison.right.error == "User not found: nobody"
        assert comparison.metrics == []

    @pytest.mark.asyncio
    async def test_degraded_upstream_compares_synthetic_profiles(
        self, comparison_service, mock_client
    ):
        mock_client.search_legacy.side_effect = TransportDegradedError(
            ErrorCode.API_CONNECTION_ERROR,
            "down",
        )

        comparison = await comparison_service.compare("alice", "bob")

        assert comparison.ready is True
        assert comparison.left.profile.is_synthetic is True
        assert comparison.tally()["draw"] == len(comparison.metrics)

    @pytest.mark.asyncio
    async def test_to_dict(self, comparison_service, two_users):
        comparison = await comparison_service.compare("alice", "bob")

        data = comparison.to_dict()

        assert data["left"]["profile"]["handle"] == "alice"
        assert data["right"]["error"] is None
        assert len(data["metrics"]) == 15
        assert set(data["tally"]) == {"left", "right", "draw"}


class TestFacade:
    @pytest.mark.asyncio
    async def test_resolve_and_clear_cache(self, comparison_service, mock_client):
        await comparison_service.resolve("alice")
        comparison_service.clear_cache()
        await comparison_service.resolve("alice")

        assert mock_client.search_legacy.await_count == 2

    @pytest.mark.asyncio
    async def test_search_delegates(self, comparison_service):
        results = await comparison_service.search("alice")

        assert [c.handle for c in results] == ["alice"]

    def test_derive_metrics_accepts_mapping(self, comparison_service):
        metrics = comparison_service.derive_metrics({"handle": "x", "score": 10})

        assert metrics.score == 10

    @pytest.mark.asyncio
    async def test_statistics_summary(self, comparison_service):
        await comparison_service.resolve("alice")
        await comparison_service.resolve("alice")

        summary = comparison_service.statistics()

        assert summary["cache"]["hits"] == 1
        assert summary["cache"]["misses"] == 1
        assert summary["resolution"]["profiles_resolved"] == 1
