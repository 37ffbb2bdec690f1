"""
Search Constants

Limits and heuristics for typeahead profile search.
"""

import re


class SearchConfig:
    """Typeahead search limits."""

    MIN_QUERY_LENGTH = 3
    UPSTREAM_LIMIT = 20
    MAX_RESULTS = 10

    # Queries made only of handle characters are treated as exact-handle
    # probes and bypass the search cache.
    HANDLE_PROBE_PATTERN = re.compile(r"^[A-Za-z0-9_]{1,15}$")
    HANDLE_PREFIX = "@"


class TypeaheadConfig:
    """Keystroke debounce timings."""

    DEBOUNCE_SECONDS = 0.15
    FAST_DEBOUNCE_SECONDS = 0.0
    FAST_DEBOUNCE_MIN_LENGTH = 8
