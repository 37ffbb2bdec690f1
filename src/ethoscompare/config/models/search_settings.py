"""Search and resolver configuration models.

Typeahead limits and debounce timings, and the offline fallback policy
of the profile resolver.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from ethoscompare.shared.constants import SearchConfig, TypeaheadConfig


class SearchSettings(BaseModel):
    """Typeahead search configuration."""

    min_query_length: int = Field(
        default=SearchConfig.MIN_QUERY_LENGTH,
        ge=1,
        description="Queries shorter than this return no results",
    )
    upstream_limit: int = Field(
        default=SearchConfig.UPSTREAM_LIMIT,
        gt=0,
        description="Number of records requested from the legacy search",
    )
    max_results: int = Field(
        default=SearchConfig.MAX_RESULTS,
        gt=0,
        description="Number of candidates returned to the caller",
    )
    debounce_seconds: float = Field(
        default=TypeaheadConfig.DEBOUNCE_SECONDS,
        ge=0,
        description="Keystroke debounce for short queries",
    )
    fast_debounce_seconds: float = Field(
        default=TypeaheadConfig.FAST_DEBOUNCE_SECONDS,
        ge=0,
        description="Keystroke debounce once the query is long enough",
    )
    fast_debounce_min_length: int = Field(
        default=TypeaheadConfig.FAST_DEBOUNCE_MIN_LENGTH,
        ge=1,
        description="Query length from which the fast debounce applies",
    )

    @model_validator(mode="after")
    def _check_limits(self) -> SearchSettings:
        if self.max_results > self.upstream_limit:
            msg = "max_results cannot exceed upstream_limit"
            raise ValueError(msg)
        return self


class ResolverSettings(BaseModel):
    """Profile resolver configuration."""

    offline_fallback: bool = Field(
        default=True,
        description=(
            "Return a synthetic placeholder profile when the primary search "
            "is unreachable instead of raising TransportDegradedError"
        ),
    )


__all__ = ["ResolverSettings", "SearchSettings"]
