"""Secret hasher interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class HashVerificationError(Exception):
    """Raised when a stored hash cannot be checked at all (corrupt or unsupported).

    Distinct from a plain mismatch, which is reported as ``False``.
    """


class AbstractSecretHasher(ABC):
    """Interface for salted, one-way secret hashing."""

    @abstractmethod
    def hash(self, secret: str) -> str:
        """Return a salted hash of ``secret``; never reversible to the input."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, secret: str, secret_hash: str) -> bool:
        """Check ``secret`` against a stored hash.

        Args:
            secret: Plaintext secret supplied by the client.
            secret_hash: Hash previously produced by ``hash``.

        Returns:
            True on match, False on mismatch.

        Raises:
            HashVerificationError: If the stored hash cannot be verified.
        """
        raise NotImplementedError
