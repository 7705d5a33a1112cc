"""In-memory credential store.

Notes:
- Per-process only; state is lost on restart.
- Thread-safe: one lock guards every read-modify-write.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from quotes_api.adapters.store.base import AbstractUserStore, UserProfile
from quotes_api.core.errors import ConflictAppError


class InMemoryUserStore(AbstractUserStore):
    """Dict-backed user store, mainly used as a test double."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, UserProfile] = {}

    def exists(self, identifier: str) -> bool:
        with self._lock:
            return identifier in self._users

    def email_exists(self, email: str) -> bool:
        with self._lock:
            return any(user.email == email for user in self._users.values())

    def get(self, identifier: str) -> UserProfile | None:
        with self._lock:
            return self._users.get(identifier)

    def insert(self, profile: UserProfile) -> None:
        with self._lock:
            if profile.identifier in self._users or self.email_exists(profile.email):
                raise ConflictAppError(
                    code="duplicate_user",
                    message="A user with the given username or email already exists.",
                )
            self._users[profile.identifier] = profile

    def update_email(self, identifier: str, email: str) -> None:
        with self._lock:
            user = self._users.get(identifier)
            if user is None:
                return
            if any(
                other.email == email and other.identifier != identifier
                for other in self._users.values()
            ):
                raise ConflictAppError(
                    code="duplicate_email",
                    message="A user with the given username or email already exists.",
                )
            self._users[identifier] = replace(user, email=email)

    def update_secret_hash(self, identifier: str, secret_hash: str) -> None:
        with self._lock:
            user = self._users.get(identifier)
            if user is not None:
                self._users[identifier] = replace(user, secret_hash=secret_hash)

    def delete(self, identifier: str) -> None:
        with self._lock:
            self._users.pop(identifier, None)

    def try_record_call(self, identifier: str, now_ms: int, min_interval_ms: int) -> bool:
        with self._lock:
            user = self._users.get(identifier)
            if user is None or now_ms - user.last_call < min_interval_ms:
                return False
            self._users[identifier] = replace(user, last_call=now_ms)
            return True

    def get_last_call(self, identifier: str) -> int | None:
        with self._lock:
            user = self._users.get(identifier)
            return user.last_call if user is not None else None
