"""ethoscompare Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: App, Logging, API, Cache, Search and Resolver settings
"""

from __future__ import annotations

from .models.settings import Settings

from .models import (
    APISettings,
    AppSettings,
    CacheSettings,
    EthosAPISettings,
    LoggingSettings,
    ResolverSettings,
    SearchSettings,
)

from .loader import (
    get_config,
    load_settings,
    reload_config,
)

__all__ = [
    "APISettings",
    "AppSettings",
    "CacheSettings",
    "EthosAPISettings",
    "LoggingSettings",
    "ResolverSettings",
    "SearchSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
