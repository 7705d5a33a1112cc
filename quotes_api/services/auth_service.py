"""Authentication of a claimed identity against the credential store.

Store lookups, verification and hashing are all blocking (Argon2id is
deliberately slow), so each runs in the default executor instead of on the
event loop.
"""

from __future__ import annotations

import logging

from quotes_api.adapters.hashing.base import AbstractSecretHasher, HashVerificationError
from quotes_api.adapters.store.base import AbstractUserStore, UserProfile
from quotes_api.core.concurrency import run_blocking
from quotes_api.core.errors import AuthenticationAppError, InternalAppError
from quotes_api.core.logging import fingerprint

logger = logging.getLogger(__name__)


class AuthService:
    """Verify identifier/secret pairs and hash new secrets.

    Attributes:
        store: Credential store holding the salted hashes.
        hasher: Salted hash primitive.
    """

    def __init__(self, store: AbstractUserStore, hasher: AbstractSecretHasher) -> None:
        self.store = store
        self.hasher = hasher

    async def hash_secret(self, secret: str) -> str:
        """Hash a new password or secret key off the event loop."""
        return await run_blocking(self.hasher.hash, secret)

    async def authenticate(self, identifier: str, secret: str) -> UserProfile:
        """Return the stored profile if ``secret`` matches ``identifier``.

        Args:
            identifier: Username or identity key, already syntactically valid.
            secret: Password or secret key supplied by the client.

        Returns:
            UserProfile of the authenticated user.

        Raises:
            AuthenticationAppError: Unknown identity or wrong secret (401).
            InternalAppError: The stored hash could not be verified (500).
        """
        identity_fp = fingerprint(identifier)
        profile = await run_blocking(self.store.get, identifier)
        if profile is None:
            logger.warning(
                "auth.failed",
                extra={"reason": "unrecognized_identity", "identity_fp": identity_fp},
            )
            raise AuthenticationAppError(
                code="unrecognized_identity",
                message="Identity is not recognized.",
            )

        try:
            matches = await run_blocking(self.hasher.verify, secret, profile.secret_hash)
        except HashVerificationError as exc:
            logger.error(
                "auth.verification_error",
                extra={"identity_fp": identity_fp},
            )
            raise InternalAppError(
                code="secret_verification_failed",
                message=(
                    "Server encountered an unknown error while verifying credentials. "
                    "Please try again later."
                ),
            ) from exc

        if not matches:
            logger.warning(
                "auth.failed",
                extra={"reason": "invalid_secret", "identity_fp": identity_fp},
            )
            raise AuthenticationAppError(
                code="invalid_secret",
                message="Password or secret key is incorrect.",
            )

        logger.info("auth.success", extra={"identity_fp": identity_fp})
        return profile
