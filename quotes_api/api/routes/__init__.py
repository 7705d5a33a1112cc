from __future__ import annotations

from quotes_api.api.routes.health import router as health_router
from quotes_api.api.routes.portal import router as portal_router
from quotes_api.api.routes.quotes import router as quotes_router
from quotes_api.api.routes.register import api_key_router as register_api_key_router
from quotes_api.api.routes.register import router as register_router

__all__ = [
    "health_router",
    "portal_router",
    "quotes_router",
    "register_api_key_router",
    "register_router",
]
