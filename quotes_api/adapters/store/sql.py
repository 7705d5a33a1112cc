"""SQLAlchemy-backed credential store."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from quotes_api.adapters.store.base import AbstractUserStore, UserProfile
from quotes_api.adapters.store.models import UserRow
from quotes_api.core.errors import ConflictAppError, InternalAppError

logger = logging.getLogger(__name__)


def _to_profile(row: UserRow) -> UserProfile:
    return UserProfile(
        identifier=row.identifier,
        email=row.email,
        secret_hash=row.secret_hash,
        name=row.name,
        last_call=row.last_call,
    )


class SqlUserStore(AbstractUserStore):
    """User store over the ``users`` table.

    Every public method runs in its own short transaction. Uniqueness of
    identifier and email is enforced by the schema, so a registration race
    still ends in a single row and a ``ConflictAppError`` for the loser.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, *, conflict_code: str = "duplicate_user") -> Iterator[Session]:
        """Open a session, commit on success and translate driver errors.

        Args:
            conflict_code: Error code used when a unique constraint fails.

        Raises:
            ConflictAppError: On unique constraint violations.
            InternalAppError: On any other database failure.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.warning("user_store.conflict", extra={"conflict_code": conflict_code})
            raise ConflictAppError(
                code=conflict_code,
                message="A user with the given username or email already exists.",
            ) from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(
                "user_store.failure",
                extra={"error_type": type(exc).__name__},
            )
            raise InternalAppError(
                code="store_failure",
                message="The credential store is unavailable. Please try again later.",
            ) from exc
        finally:
            session.close()

    def exists(self, identifier: str) -> bool:
        with self._transaction() as session:
            stmt = select(UserRow.identifier).where(UserRow.identifier == identifier).limit(1)
            return session.execute(stmt).first() is not None

    def email_exists(self, email: str) -> bool:
        with self._transaction() as session:
            stmt = select(UserRow.identifier).where(UserRow.email == email).limit(1)
            return session.execute(stmt).first() is not None

    def get(self, identifier: str) -> UserProfile | None:
        with self._transaction() as session:
            row = session.get(UserRow, identifier)
            return _to_profile(row) if row is not None else None

    def insert(self, profile: UserProfile) -> None:
        with self._transaction() as session:
            session.add(
                UserRow(
                    identifier=profile.identifier,
                    name=profile.name,
                    email=profile.email,
                    secret_hash=profile.secret_hash,
                    last_call=profile.last_call,
                )
            )

    def update_email(self, identifier: str, email: str) -> None:
        with self._transaction(conflict_code="duplicate_email") as session:
            session.execute(
                update(UserRow)
                .where(UserRow.identifier == identifier)
                .values(email=email)
                .execution_options(synchronize_session=False)
            )

    def update_secret_hash(self, identifier: str, secret_hash: str) -> None:
        with self._transaction() as session:
            session.execute(
                update(UserRow)
                .where(UserRow.identifier == identifier)
                .values(secret_hash=secret_hash)
                .execution_options(synchronize_session=False)
            )

    def delete(self, identifier: str) -> None:
        with self._transaction() as session:
            session.execute(
                delete(UserRow)
                .where(UserRow.identifier == identifier)
                .execution_options(synchronize_session=False)
            )

    def try_record_call(self, identifier: str, now_ms: int, min_interval_ms: int) -> bool:
        # Single conditional UPDATE: the database serializes writers on the
        # row, so the check and the set cannot interleave between requests.
        with self._transaction() as session:
            result = session.execute(
                update(UserRow)
                .where(
                    UserRow.identifier == identifier,
                    UserRow.last_call <= now_ms - min_interval_ms,
                )
                .values(last_call=now_ms)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1

    def get_last_call(self, identifier: str) -> int | None:
        with self._transaction() as session:
            stmt = select(UserRow.last_call).where(UserRow.identifier == identifier)
            return session.execute(stmt).scalar_one_or_none()
