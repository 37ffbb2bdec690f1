"""
ethoscompare Constants Module

This module provides centralized constants for the ethoscompare package.
Magic values and configuration defaults are defined here to keep a single
source of truth across the codebase.
"""

from .api import APIFields, EthosAPIConfig, EthosEndpoints
from .cache import BASE_MINUTE, BASE_SECOND, CacheConfig
from .cli import CLICommands, CLIDefaults, CLIHelp, ShareConfig
from .metrics import MetricKeys, ScoreBrackets, UnitConversion
from .search import SearchConfig, TypeaheadConfig

__all__ = [
    "BASE_MINUTE",
    "BASE_SECOND",
    "APIFields",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CacheConfig",
    "EthosAPIConfig",
    "EthosEndpoints",
    "MetricKeys",
    "ScoreBrackets",
    "SearchConfig",
    "ShareConfig",
    "TypeaheadConfig",
    "UnitConversion",
]
