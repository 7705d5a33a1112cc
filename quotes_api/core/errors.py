"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. Each subclass maps to
exactly one HTTP status code (see ``http_status``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional to keep the shape flexible while encouraging
    consistent keys across the codebase.
    """

    code: str
    message: str
    hint: str
    field: str
    invalid_value: str
    max_length: int
    retry_after: float
    retry_after_ms: int
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    http_status: ClassVar[int] = 400

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when headers, query parameters or body fields are malformed."""

    http_status = 400


class AuthenticationAppError(AppError):
    """Raised when the identity is unknown or the secret does not match."""

    http_status = 401


class ConflictAppError(AppError):
    """Raised when a registration or update collides with an existing user."""

    http_status = 409


class RateLimitAppError(AppError):
    """Raised when a user calls again before the throttle interval elapsed."""

    http_status = 429


class InternalAppError(AppError):
    """Raised when secret verification or the credential store fails."""

    http_status = 500
