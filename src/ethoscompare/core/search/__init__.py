"""Typeahead search."""

from .cancellation import CancellationSource, CancellationToken
from .search_resolver import (
    SearchResolver,
    deduplicate_candidates,
    is_handle_probe,
    matches_query,
    rank_candidates,
)
from .typeahead import TypeaheadSearch

__all__ = [
    "CancellationSource",
    "CancellationToken",
    "SearchResolver",
    "TypeaheadSearch",
    "deduplicate_candidates",
    "is_handle_probe",
    "matches_query",
    "rank_candidates",
]
