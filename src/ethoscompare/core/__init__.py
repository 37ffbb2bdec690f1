"""
Core components for ethoscompare.

Domain models, response normalization, resolvers, metrics and the
comparison service.
"""

from .models import (
    ReputationLevel,
    ReviewCounts,
    SearchCandidate,
    UserProfile,
    VouchStats,
    level_for_score,
)
from .statistics import StatisticsCollector

__all__ = [
    "ReputationLevel",
    "ReviewCounts",
    "SearchCandidate",
    "StatisticsCollector",
    "UserProfile",
    "VouchStats",
    "level_for_score",
]
