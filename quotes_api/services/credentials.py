"""Generation of API-key credentials.

Keys are 32 bytes from the operating system CSPRNG (``secrets``), hex-encoded
to 64 lowercase characters and prefixed with ``identity-`` or ``secret-``.
"""

from __future__ import annotations

import logging
import secrets

from quotes_api.adapters.hashing.base import AbstractSecretHasher
from quotes_api.adapters.store.base import AbstractUserStore
from quotes_api.core.logging import fingerprint
from quotes_api.services.request_validation import IDENTITY_PREFIX, SECRET_PREFIX

logger = logging.getLogger(__name__)

KEY_BYTES = 32


def _random_hex() -> str:
    return secrets.token_hex(KEY_BYTES)


def generate_identity_key(store: AbstractUserStore) -> str:
    """Generate an identity key that no stored user has yet.

    A collision on 256 random bits is practically impossible, but the key is
    still re-rolled until the store confirms it is unused.

    Args:
        store: Credential store used for the uniqueness check.

    Returns:
        ``identity-`` followed by 64 lowercase hex characters.
    """
    identity_key = IDENTITY_PREFIX + _random_hex()
    while store.exists(identity_key):
        logger.warning(
            "credentials.identity_key_collision",
            extra={"identity_fp": fingerprint(identity_key)},
        )
        identity_key = IDENTITY_PREFIX + _random_hex()
    return identity_key


def generate_secret_key_pair(hasher: AbstractSecretHasher) -> tuple[str, str]:
    """Generate a secret key and its salted hash.

    Only the hash may be persisted; the plaintext goes back to the caller
    once and is never stored or logged.

    Args:
        hasher: Salted hash primitive (Argon2id in production).

    Returns:
        Tuple of (secret_key, secret_hash).
    """
    secret_key = SECRET_PREFIX + _random_hex()
    return secret_key, hasher.hash(secret_key)
