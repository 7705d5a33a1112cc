"""Argon2id secret hasher backed by argon2-cffi."""

from __future__ import annotations

import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from quotes_api.adapters.hashing.base import AbstractSecretHasher, HashVerificationError

logger = logging.getLogger(__name__)


class Argon2SecretHasher(AbstractSecretHasher):
    """Hash and verify secrets with Argon2id.

    Salts are generated per hash by argon2-cffi and embedded in the encoded
    hash string, so only that string needs to be stored.
    """

    def __init__(
        self,
        *,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, secret: str) -> str:
        return self._hasher.hash(secret)

    def verify(self, secret: str, secret_hash: str) -> bool:
        try:
            return self._hasher.verify(secret_hash, secret)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as exc:
            logger.error(
                "hashing.verify_failed",
                extra={"error_type": type(exc).__name__},
            )
            raise HashVerificationError(str(exc)) from exc
