"""Fixed-interval rate limiter backed by the user's ``last_call`` column.

One accepted request per interval per user: a token bucket of size 1 with no
burst allowance. Rejected calls never move ``last_call``, so hammering the
API does not push the next allowed slot further out.
"""

from __future__ import annotations

import time
from typing import Callable

from quotes_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from quotes_api.adapters.store.base import AbstractUserStore


class StoreBackedRateLimiter(AbstractRateLimiter):
    """Rate limiter whose only state is ``last_call`` in the credential store.

    The check-then-set is delegated to ``AbstractUserStore.try_record_call``,
    which is atomic per identifier; concurrent requests in the same interval
    cannot both be accepted.
    """

    def __init__(
        self,
        store: AbstractUserStore,
        *,
        interval_ms: int = 1000,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            store: Credential store holding ``last_call`` per user.
            interval_ms: Minimum spacing between two accepted requests.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If interval_ms is invalid.
        """
        if interval_ms < 1:
            raise ValueError("interval_ms must be >= 1")

        self._store = store
        self._interval_ms = interval_ms
        self._clock = clock

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def consume(self, identifier: str) -> RateLimitResult:
        """Record the call if the interval elapsed, otherwise report a block.

        Raises:
            ValueError: If identifier is empty.
        """
        if not identifier:
            raise ValueError("identifier must be a non-empty string")

        now_ms = self._now_ms()
        if self._store.try_record_call(identifier, now_ms, self._interval_ms):
            return RateLimitResult(
                allowed=True,
                interval_ms=self._interval_ms,
                retry_after_ms=None,
            )

        last_call = self._store.get_last_call(identifier)
        if last_call is None:
            # The row vanished between authentication and now (account deleted).
            retry_after_ms = self._interval_ms
        else:
            retry_after_ms = max(0, self._interval_ms - (now_ms - last_call))
        return RateLimitResult(
            allowed=False,
            interval_ms=self._interval_ms,
            retry_after_ms=retry_after_ms,
        )
