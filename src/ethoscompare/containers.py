"""Dependency Injection container for ethoscompare.

This module provides a centralized DI container using dependency-injector
to wire one comparison session:

- Settings (Singleton)
- Statistics collector and cache store (Singleton, one per session)
- Ethos API client (Singleton, owns the HTTP session)
- Response normalizer, profile and search resolvers
- Comparison service (the presentation-layer facade)
- Typeahead controller (Factory, one per input field)
"""

from __future__ import annotations

from dependency_injector import containers, providers

from ethoscompare.config.loader import load_settings
from ethoscompare.core.comparison import ProfileComparisonService
from ethoscompare.core.normalization import ResponseNormalizer
from ethoscompare.core.resolver import ProfileResolver
from ethoscompare.core.search import SearchResolver, TypeaheadSearch
from ethoscompare.core.statistics import StatisticsCollector
from ethoscompare.services import CacheStore, EthosClient


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for ethoscompare services.

    Example:
        >>> container = Container()
        >>> container.config.override(providers.Object(Settings()))
        >>> service = container.comparison_service()
        >>> comparison = await service.compare("alice", "bob")
    """

    # Configuration
    config = providers.Singleton(load_settings)

    statistics = providers.Singleton(StatisticsCollector)

    cache_store = providers.Singleton(
        CacheStore,
        profile_ttl=providers.Callable(lambda config: config.cache.profile_ttl, config=config),
        search_ttl=providers.Callable(lambda config: config.cache.search_ttl, config=config),
    )

    # Ethos client
    ethos_client = providers.Singleton(
        EthosClient,
        settings=providers.Callable(lambda config: config.api.ethos, config=config),
        statistics=statistics,
    )

    normalizer = providers.Singleton(ResponseNormalizer)

    # Resolvers
    profile_resolver = providers.Singleton(
        ProfileResolver,
        client=ethos_client,
        cache=cache_store,
        normalizer=normalizer,
        settings=providers.Callable(lambda config: config.resolver, config=config),
        search_limit=providers.Callable(
            lambda config: config.api.ethos.resolve_search_limit,
            config=config,
        ),
        statistics=statistics,
    )

    search_resolver = providers.Singleton(
        SearchResolver,
        client=ethos_client,
        cache=cache_store,
        normalizer=normalizer,
        settings=providers.Callable(lambda config: config.search, config=config),
        statistics=statistics,
    )

    comparison_service = providers.Singleton(
        ProfileComparisonService,
        profile_resolver=profile_resolver,
        search_resolver=search_resolver,
        cache=cache_store,
        statistics=statistics,
    )

    typeahead = providers.Factory(
        TypeaheadSearch,
        resolver=search_resolver,
    )
