"""Credential store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """Stored profile of one user.

    Attributes:
        identifier: Username or identity key; unique primary lookup key.
        email: Contact address (unique across users).
        secret_hash: Salted hash of the password or secret key.
        name: Display name (API-key registrations only).
        last_call: Epoch milliseconds of the last accepted request, 0 if none.
    """

    identifier: str
    email: str
    secret_hash: str
    name: str | None = None
    last_call: int = 0


class AbstractUserStore(ABC):
    """Mapping from user identifier to stored profile.

    Implementations must make ``try_record_call`` atomic per identifier: two
    concurrent callers inside the same interval must not both succeed.
    """

    @abstractmethod
    def exists(self, identifier: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def email_exists(self, email: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get(self, identifier: str) -> UserProfile | None:
        raise NotImplementedError

    @abstractmethod
    def insert(self, profile: UserProfile) -> None:
        """Insert a new user.

        Raises:
            ConflictAppError: If the identifier or email is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    def update_email(self, identifier: str, email: str) -> None:
        """Replace the stored email.

        Raises:
            ConflictAppError: If another user already has ``email``.
        """
        raise NotImplementedError

    @abstractmethod
    def update_secret_hash(self, identifier: str, secret_hash: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, identifier: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def try_record_call(self, identifier: str, now_ms: int, min_interval_ms: int) -> bool:
        """Atomically set ``last_call = now_ms`` if the interval has elapsed.

        Args:
            identifier: Authenticated user identifier.
            now_ms: Current time in epoch milliseconds.
            min_interval_ms: Minimum distance to the previous accepted call.

        Returns:
            True if the call was recorded, False if it came too early (or the
            user no longer exists). ``last_call`` is untouched on False.
        """
        raise NotImplementedError

    @abstractmethod
    def get_last_call(self, identifier: str) -> int | None:
        raise NotImplementedError
