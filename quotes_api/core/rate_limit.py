"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer. It runs
after authentication, so the limiter key is always a verified identifier and
unauthenticated traffic can never consume (or reset) a user's slot.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from quotes_api.adapters.rate_limit.base import AbstractRateLimiter
from quotes_api.api.dependencies import get_rate_limiter, get_settings
from quotes_api.core.auth import authenticate_request
from quotes_api.core.concurrency import run_blocking
from quotes_api.core.config import Settings
from quotes_api.core.errors import RateLimitAppError
from quotes_api.core.logging import fingerprint

logger = logging.getLogger(__name__)


async def enforce_rate_limit(
    identifier: Annotated[str, Depends(authenticate_request)],
    limiter: Annotated[AbstractRateLimiter, Depends(get_rate_limiter)],
    cfg: Annotated[Settings, Depends(get_settings)],
) -> str:
    """FastAPI dependency enforcing one request per interval per user.

    Args:
        identifier: Authenticated user identifier.
        limiter: Configured rate limiter.
        cfg: Active settings.

    Returns:
        The identifier, so routes can depend on this alone.

    Raises:
        RateLimitAppError: 429 when the previous accepted call is too recent.
    """
    if not cfg.app.rate_limit_enabled:
        return identifier

    identity_fp = fingerprint(identifier)
    result = await run_blocking(limiter.consume, identifier)
    if result.allowed:
        logger.info(
            "rate_limit.allowed",
            extra={"identity_fp": identity_fp, "interval_ms": result.interval_ms},
        )
        return identifier

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "identity_fp": identity_fp,
            "interval_ms": result.interval_ms,
            "retry_after_ms": result.retry_after_ms,
        },
    )
    raise RateLimitAppError(
        code="rate_limited",
        message=f"Rate limit is one request every {result.interval_ms} ms. Try again later.",
        details={
            "retry_after": result.retry_after_seconds,
            "retry_after_ms": result.retry_after_ms,
        },
    )
