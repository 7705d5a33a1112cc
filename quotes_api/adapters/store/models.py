"""SQLAlchemy table definitions for users and quotes."""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    """One registered account.

    ``identifier`` is either a username or an ``identity-<hex>`` key,
    depending on the configured auth scheme.
    """

    __tablename__ = "users"

    identifier: Mapped[str] = mapped_column(String(80), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    email: Mapped[str] = mapped_column(String(254), unique=True, index=True, nullable=False)
    secret_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # Milliseconds since epoch of the last accepted authenticated request
    last_call: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class QuoteRow(Base):
    """Static quote loaded from the CSV dataset at startup."""

    __tablename__ = "quotes"

    quote_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quote: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    context: Mapped[str] = mapped_column(Text, nullable=False, default="")
    source: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
