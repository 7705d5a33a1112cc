"""Factory for the configured secret hasher."""

from quotes_api.adapters.hashing.argon2_hasher import Argon2SecretHasher
from quotes_api.adapters.hashing.base import AbstractSecretHasher
from quotes_api.core.config import HashSettings, settings


def create_secret_hasher(hash_settings: HashSettings | None = None) -> AbstractSecretHasher:
    """Build the Argon2id hasher from ``HASH_*`` settings.

    Args:
        hash_settings: Optional override; defaults to the global settings.

    Returns:
        AbstractSecretHasher: Configured hasher instance.
    """
    cfg = hash_settings or settings.hash
    return Argon2SecretHasher(
        time_cost=cfg.time_cost,
        memory_cost=cfg.memory_cost,
        parallelism=cfg.parallelism,
    )
