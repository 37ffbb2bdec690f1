"""API configuration models.

This module contains configuration models for the upstream Ethos
scoring network: base URLs, client identification, timeouts and retries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ethoscompare.shared.constants import EthosAPIConfig


class EthosAPISettings(BaseModel):
    """Ethos API configuration.

    The legacy (v1) base URL serves the fast search endpoint; the v2 base
    URL serves the score lookup and the enriched user search.
    """

    base_url: str = Field(
        default=EthosAPIConfig.BASE_URL,
        description="Base URL of the v2 API",
    )
    legacy_base_url: str = Field(
        default=EthosAPIConfig.LEGACY_BASE_URL,
        description="Base URL of the legacy v1 API",
    )
    client_name: str = Field(
        default=EthosAPIConfig.CLIENT_NAME,
        description="Value sent in the client identification header",
    )

    # Request settings
    timeout: float = Field(
        default=EthosAPIConfig.TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )

    # Retry settings
    retry_attempts: int = Field(
        default=EthosAPIConfig.RETRY_ATTEMPTS,
        ge=0,
        description="Retries for idempotent requests on gateway errors",
    )
    retry_backoff: float = Field(
        default=EthosAPIConfig.RETRY_BACKOFF,
        ge=0,
        description="Exponential backoff factor between retries in seconds",
    )

    resolve_search_limit: int = Field(
        default=EthosAPIConfig.RESOLVE_SEARCH_LIMIT,
        gt=0,
        description="Result limit of the legacy search used for profile resolution",
    )


class APISettings(BaseModel):
    """API configuration container."""

    ethos: EthosAPISettings = Field(
        default_factory=EthosAPISettings,
        description="Ethos API configuration",
    )


__all__ = [
    "APISettings",
    "EthosAPISettings",
]
