"""Rate limiting adapters.

The API layer depends on ``AbstractRateLimiter`` only; the shipped limiter
keeps its state in the user rows of the credential store.
"""

from quotes_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from quotes_api.adapters.rate_limit.store_backed import StoreBackedRateLimiter

__all__ = ["AbstractRateLimiter", "RateLimitResult", "StoreBackedRateLimiter"]
