"""
Upstream API Constants

Endpoint paths, client identification and request defaults for the
Ethos scoring network.
"""


class EthosEndpoints:
    """Upstream endpoint paths."""

    # v1 (legacy, fast search)
    LEGACY_SEARCH = "/search"

    # v2 (richer records)
    SCORE_BY_USERKEY = "/score/userkey"
    USERS_SEARCH = "/users/search"


class EthosAPIConfig:
    """Request defaults for the upstream API."""

    BASE_URL = "https://api.ethos.network/api/v2"
    LEGACY_BASE_URL = "https://api.ethos.network/api/v1"

    CLIENT_HEADER = "X-Ethos-Client"
    CLIENT_NAME = "ethos-profile-comparison@1.0.0"

    TIMEOUT = 5.0  # seconds
    RETRY_ATTEMPTS = 1
    RETRY_BACKOFF = 0.3
    RETRY_STATUS_CODES = (502, 503, 504)

    RESOLVE_SEARCH_LIMIT = 10


class APIFields:
    """Field names in upstream payloads."""

    OK = "ok"
    DATA = "data"
    VALUES = "values"
    LEVEL = "level"

    # Query parameters
    QUERY = "query"
    LIMIT = "limit"
    USERKEY = "userkey"
