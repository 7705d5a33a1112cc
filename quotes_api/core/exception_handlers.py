"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain, request validation and unexpected) and return consistent JSON
responses with proper HTTP status codes and traceability.

Design:
- AppError subclasses → their own ``http_status`` (400, 401, 409, 429, 500)
- RequestValidationError → 400 (malformed body or query types)
- Unexpected Exception → generic 500 (safety net)
- All responses include request_id for distributed tracing
"""

import logging
import math

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quotes_api.api.dependencies import get_settings
from quotes_api.core.errors import AppError, RateLimitAppError
from quotes_api.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    error_content = {
        "code": code,
        "message": message,
        "request_id": get_request_id(),
    }

    # Include details only if present (optional structured context)
    if details:
        error_content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=headers,
    )


def _rate_limit_headers(request: Request, exc: RateLimitAppError) -> dict[str, str] | None:
    """Build throttling headers from the error details, if enabled."""

    cfg = get_settings(request).app
    if not cfg.rate_limit_include_headers:
        return None

    retry_after_ms = (exc.details or {}).get("retry_after_ms", cfg.rate_limit_interval_ms)
    # Retry-After is whole seconds; never advertise 0 while still blocked
    return {
        "Retry-After": str(max(1, math.ceil(retry_after_ms / 1000))),
        "X-RateLimit-Interval-ms": str(cfg.rate_limit_interval_ms),
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with consistent JSON format.

    The status code comes from the error class:
    - ValidationAppError → 400 Bad Request
    - AuthenticationAppError → 401 Unauthorized
    - ConflictAppError → 409 Conflict
    - RateLimitAppError → 429 Too Many Requests (+ Retry-After)
    - InternalAppError → 500 Internal Server Error

    All responses include:
    - error.code: Machine-readable error code
    - error.message: Human-readable message
    - error.request_id: For distributed tracing
    - error.details: Optional structured context

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with appropriate status code and error details.
    """
    status_code = exc.http_status
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    headers = _rate_limit_headers(request, exc) if isinstance(exc, RateLimitAppError) else None
    return _error_response(
        status_code,
        exc.code,
        exc.message,
        details=dict(exc.details) if exc.details else None,
        headers=headers,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map FastAPI's 422 validation failures onto the 400 malformed-input class.

    Only the location and type of each problem are returned; submitted values
    are never echoed back because bodies may carry passwords.
    """
    problems = [
        {"loc": [str(part) for part in err.get("loc", ())], "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.warning(
        "request_validation_failed",
        extra={
            "request_path": request.url.path,
            "problem_count": len(problems),
            "request_id": get_request_id(),
        },
    )
    return _error_response(
        400,
        "invalid_request",
        "Request body or parameters are missing or have the wrong type.",
        details={"context": {"problems": problems}},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Catches any exception not handled by specific handlers.
    Logs detailed information for debugging while returning generic message.
    Prevents information leakage (no stack traces to client).

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with generic error (no implementation details leaked).
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return _error_response(
        500,
        "internal_server_error",
        "An unexpected error occurred. Please try again later.",
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Must be called during app initialization, before route registration.

    Args:
        app: FastAPI application instance.

    Example:
        >>> from fastapi import FastAPI
        >>> from quotes_api.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
