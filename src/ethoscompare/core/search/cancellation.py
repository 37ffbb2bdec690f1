"""Request-generation cancellation tokens.

A ``CancellationSource`` hands out tokens from a monotonically increasing
counter. Only the most recently issued token is live: issuing a new one,
or calling ``cancel_all``, supersedes every older token. Staleness is a
property of the request identity, so overlapping cancellations cannot
revive an old request.
"""

from __future__ import annotations

import itertools


class CancellationSource:
    """Issues request ids and tracks the current one."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current = 0

    @property
    def current_id(self) -> int:
        return self._current

    def issue(self) -> CancellationToken:
        """Issue a new token, superseding all earlier ones."""
        self._current = next(self._counter)
        return CancellationToken(self._current, self)

    def cancel_all(self) -> None:
        """Supersede every outstanding token without issuing a new one."""
        self._current = next(self._counter)

    def is_current(self, request_id: int) -> bool:
        return request_id == self._current


class CancellationToken:
    """Identity of one request; cancelled once superseded."""

    __slots__ = ("request_id", "_source")

    def __init__(self, request_id: int, source: CancellationSource) -> None:
        self.request_id = request_id
        self._source = source

    @property
    def cancelled(self) -> bool:
        return not self._source.is_current(self.request_id)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "live"
        return f"CancellationToken(request_id={self.request_id}, {state})"
