"""Database engine and session wiring.

Nothing here is module-global: the app factory builds one engine and hands
session factories to the stores it places on ``app.state``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from quotes_api.adapters.store.models import Base
from quotes_api.core.config import DatabaseSettings, settings

logger = logging.getLogger(__name__)


def create_db_engine(db_settings: DatabaseSettings | None = None) -> Engine:
    """Create the SQLAlchemy engine for the configured URL.

    SQLite gets ``check_same_thread=False`` because FastAPI runs sync work in a
    thread pool; an in-memory SQLite URL additionally shares one connection
    (``StaticPool``) so every session sees the same database.

    Args:
        db_settings: Optional override; defaults to the global settings.

    Returns:
        Engine: Configured engine.
    """
    cfg = db_settings or settings.db
    url = make_url(cfg.url)
    kwargs: dict = {"echo": cfg.echo}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **kwargs)
    logger.info("database.engine_created", extra={"backend": url.get_backend_name()})
    return engine


def init_db(engine: Engine) -> None:
    """Create the users and quotes tables if they do not exist."""
    Base.metadata.create_all(bind=engine)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
