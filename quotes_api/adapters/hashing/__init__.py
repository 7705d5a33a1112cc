"""Salted secret hashing adapters.

Services depend on ``AbstractSecretHasher`` only, so the memory-hard KDF can be
swapped (or replaced by a cheap fake in tests) without touching them.
"""

from quotes_api.adapters.hashing.argon2_hasher import Argon2SecretHasher
from quotes_api.adapters.hashing.base import AbstractSecretHasher, HashVerificationError
from quotes_api.adapters.hashing.factory import create_secret_hasher

__all__ = [
    "AbstractSecretHasher",
    "Argon2SecretHasher",
    "HashVerificationError",
    "create_secret_hasher",
]
