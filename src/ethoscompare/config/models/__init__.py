"""Configuration domain models."""

from __future__ import annotations

from .api_settings import APISettings, EthosAPISettings
from .app_settings import AppSettings, LoggingSettings
from .cache_settings import CacheSettings
from .search_settings import ResolverSettings, SearchSettings

__all__ = [
    "APISettings",
    "AppSettings",
    "CacheSettings",
    "EthosAPISettings",
    "LoggingSettings",
    "ResolverSettings",
    "SearchSettings",
]
