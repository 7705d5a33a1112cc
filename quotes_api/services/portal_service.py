"""Self-service account operations.

Every method acts on the identifier resolved by authentication. Each one is a
single store update, so there is nothing to roll back on failure.
"""

from __future__ import annotations

import logging

from quotes_api.adapters.store.base import AbstractUserStore
from quotes_api.core.concurrency import run_blocking
from quotes_api.core.errors import AuthenticationAppError
from quotes_api.core.logging import fingerprint
from quotes_api.services.auth_service import AuthService
from quotes_api.services.request_validation import validate_email, validate_password

logger = logging.getLogger(__name__)


class PortalService:
    def __init__(self, store: AbstractUserStore, auth_service: AuthService) -> None:
        self._store = store
        self._auth = auth_service

    async def get_current_email(self, identifier: str) -> str:
        profile = await run_blocking(self._store.get, identifier)
        if profile is None:
            # Deleted between authentication and this call.
            raise AuthenticationAppError(
                code="unrecognized_identity",
                message="Identity is not recognized.",
            )
        return profile.email

    async def change_email(self, identifier: str, new_email: str) -> None:
        """Validate and store a new email; the old value stays on any failure."""
        validate_email(new_email)
        await run_blocking(self._store.update_email, identifier, new_email)
        logger.info("portal.email_changed", extra={"identity_fp": fingerprint(identifier)})

    async def change_password(self, identifier: str, new_password: str) -> None:
        validate_password(new_password)
        new_hash = await self._auth.hash_secret(new_password)
        await run_blocking(self._store.update_secret_hash, identifier, new_hash)
        logger.info("portal.password_changed", extra={"identity_fp": fingerprint(identifier)})

    async def delete_account(self, identifier: str) -> None:
        await run_blocking(self._store.delete, identifier)
        logger.info("portal.account_deleted", extra={"identity_fp": fingerprint(identifier)})
