"""Rate limiter interfaces.

The API should depend on this abstraction (not the concrete implementation)
so the throttle state can move to another backend with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a rate limit consume operation.

    Attributes:
        allowed: Whether the request is allowed to proceed.
        interval_ms: Minimum spacing between accepted requests.
        retry_after_ms: Milliseconds until the next call would be accepted;
            None when allowed.
    """

    allowed: bool
    interval_ms: int
    retry_after_ms: int | None

    @property
    def retry_after_seconds(self) -> float | None:
        if self.retry_after_ms is None:
            return None
        return self.retry_after_ms / 1000


class AbstractRateLimiter(ABC):
    """Interface for per-user rate limiters."""

    @abstractmethod
    def consume(self, identifier: str) -> RateLimitResult:
        """Try to spend the user's single request slot.

        Args:
            identifier: Authenticated user identifier.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError
