"""User registration for both credential flows.

- ``register_user``: username/password accounts (the default flow).
- ``register_api_client``: issues a generated identity/secret key pair, with
  a honeypot field that silently drops bot sign-ups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from quotes_api.adapters.hashing.base import AbstractSecretHasher
from quotes_api.adapters.store.base import AbstractUserStore, UserProfile
from quotes_api.core.concurrency import run_blocking
from quotes_api.core.errors import ConflictAppError, ValidationAppError
from quotes_api.core.logging import fingerprint
from quotes_api.services.credentials import generate_identity_key, generate_secret_key_pair
from quotes_api.services.request_validation import (
    is_valid_email,
    is_valid_password,
    is_valid_username,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedApiKeys:
    identity_key: str
    secret_key: str


def is_spam(reason: str | None) -> bool:
    """Honeypot check: humans never see the ``reason`` field, bots fill it."""
    return bool(reason)


def _duplicate_user(message: str) -> ConflictAppError:
    return ConflictAppError(code="duplicate_user", message=message)


class RegistrationService:
    """Create user rows with freshly hashed credentials."""

    def __init__(
        self,
        store: AbstractUserStore,
        hasher: AbstractSecretHasher,
        *,
        max_name_chars: int = 1000,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._max_name_chars = max_name_chars

    async def register_user(self, username: str, email: str, password: str) -> None:
        """Register a username/password account.

        Raises:
            ValidationAppError: ``missing_inputs`` or ``malformed_inputs`` (400).
            ConflictAppError: Username or email already registered (409).
        """
        if not username or not email or not password:
            raise ValidationAppError(code="missing_inputs", message="Missing input(s).")

        if not (
            is_valid_username(username)
            and is_valid_email(email)
            and is_valid_password(password)
        ):
            raise ValidationAppError(code="malformed_inputs", message="Malformed input(s).")

        if await run_blocking(self._store.exists, username):
            raise _duplicate_user(f"Username already exists: {username}")
        if await run_blocking(self._store.email_exists, email):
            raise _duplicate_user("A user already exists with the given email.")

        password_hash = await run_blocking(self._hasher.hash, password)
        # The unique constraints still guard against a concurrent twin request.
        await run_blocking(
            self._store.insert,
            UserProfile(identifier=username, email=email, secret_hash=password_hash),
        )
        logger.info("register.created", extra={"identity_fp": fingerprint(username)})

    async def register_api_client(
        self,
        name: str,
        email: str,
        reason: str | None = None,
    ) -> IssuedApiKeys | None:
        """Issue an identity/secret key pair for a new API client.

        Args:
            name: Display name; truncated to ``max_name_chars``.
            email: Contact address; must be unique.
            reason: Honeypot field; any non-empty value marks the request as spam.

        Returns:
            The plaintext keys (shown once), or None for a spam submission,
            in which case nothing is stored.

        Raises:
            ValidationAppError: Missing name/email or invalid email (400).
            ConflictAppError: Email already registered (409).
        """
        if is_spam(reason):
            logger.info("register.honeypot_triggered")
            return None

        if not name or not email:
            raise ValidationAppError(
                code="missing_inputs",
                message='Invalid "name" and/or "email" inputs.',
            )
        if not is_valid_email(email):
            raise ValidationAppError(code="malformed_inputs", message="Email address is invalid.")

        name = name[: self._max_name_chars]
        if await run_blocking(self._store.email_exists, email):
            raise _duplicate_user("A user already exists with the given email.")

        identity_key = await run_blocking(generate_identity_key, self._store)
        secret_key, secret_hash = await run_blocking(generate_secret_key_pair, self._hasher)
        await run_blocking(
            self._store.insert,
            UserProfile(identifier=identity_key, email=email, secret_hash=secret_hash, name=name),
        )
        logger.info("register.created", extra={"identity_fp": fingerprint(identity_key)})
        return IssuedApiKeys(identity_key=identity_key, secret_key=secret_key)
