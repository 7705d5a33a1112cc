from __future__ import annotations

"""Application factory for FastAPI app.

Centralizes app construction (metadata, storage, services, middleware,
handlers, routers) so tests can build isolated instances with their own
settings and in-memory database.
"""

import logging

from fastapi import FastAPI

from quotes_api.adapters.hashing.factory import create_secret_hasher
from quotes_api.adapters.rate_limit.store_backed import StoreBackedRateLimiter
from quotes_api.adapters.store.quotes import QuoteRepository
from quotes_api.adapters.store.sql import SqlUserStore
from quotes_api.api.routes import (
    health_router,
    portal_router,
    quotes_router,
    register_api_key_router,
    register_router,
)
from quotes_api.core.config import Settings, settings
from quotes_api.core.database import create_db_engine, create_session_factory, init_db
from quotes_api.core.exception_handlers import setup_exception_handlers
from quotes_api.core.logging import configure_logging
from quotes_api.core.middleware import request_id_middleware
from quotes_api.core.openapi import apply_openapi_customizations
from quotes_api.services.auth_service import AuthService
from quotes_api.services.portal_service import PortalService
from quotes_api.services.quote_service import QuoteService
from quotes_api.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)


def _build_state(app: FastAPI, cfg: Settings) -> None:
    """Create the store handles and services and attach them to ``app.state``."""

    engine = create_db_engine(cfg.db)
    init_db(engine)
    session_factory = create_session_factory(engine)

    quote_repository = QuoteRepository(session_factory)
    quote_repository.load_csv(cfg.app.quotes_csv)

    user_store = SqlUserStore(session_factory)
    hasher = create_secret_hasher(cfg.hash)
    auth_service = AuthService(user_store, hasher)

    app.state.settings = cfg
    app.state.engine = engine
    app.state.user_store = user_store
    app.state.auth_service = auth_service
    app.state.rate_limiter = StoreBackedRateLimiter(
        user_store,
        interval_ms=cfg.app.rate_limit_interval_ms,
    )
    app.state.quote_service = QuoteService(quote_repository)
    app.state.registration_service = RegistrationService(
        user_store,
        hasher,
        max_name_chars=cfg.app.max_name_chars,
    )
    app.state.portal_service = PortalService(user_store, auth_service)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        app_settings: Optional settings override; defaults to the global
            settings loaded from the environment.

    Returns:
        Configured FastAPI app with storage, middleware, handlers, routers and docs.
    """
    cfg = app_settings or settings

    # Logging first so subsequent init logs are formatted as desired
    configure_logging(cfg.log)

    app = FastAPI(
        title="Quotes API",
        description=(
            "Serves random video game quotes filtered by character and source. "
            "Every quote request must be authenticated and is limited to one "
            "request per second per user. Accounts are created through "
            "/register and managed through the /portal endpoints."
        ),
        version="0.1.0",
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    _build_state(app, cfg)

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers: exactly one credential flow per deployment
    app.include_router(quotes_router)
    if cfg.app.auth_scheme == "api_key":
        app.include_router(register_api_key_router)
    else:
        app.include_router(register_router)
        app.include_router(portal_router)
    app.include_router(health_router)

    # OpenAPI customizations (security schemes, tags, exemptions)
    apply_openapi_customizations(app, auth_scheme=cfg.app.auth_scheme)

    logger.info(
        "app.created",
        extra={"auth_scheme": cfg.app.auth_scheme, "app_env": cfg.app_env},
    )
    return app
