"""
Cache Configuration Constants

Expiry windows for the process-local cache stores. Profile entries live
for minutes; typeahead results go stale faster relative to user intent
and live for seconds.
"""

# Base time units for TTL calculations
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND


class CacheConfig:
    """Cache expiry windows."""

    PROFILE_TTL = 5 * BASE_MINUTE
    SEARCH_TTL = 30 * BASE_SECOND

    TYPE_PROFILE = "profile"
    TYPE_SEARCH = "search"
