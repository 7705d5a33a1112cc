"""FastAPI dependencies exposing the collaborators built by the app factory.

Routes never import a global store or connection; they receive everything
through these accessors, which tests can replace via
``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from quotes_api.adapters.rate_limit.base import AbstractRateLimiter
from quotes_api.core.config import Settings, settings
from quotes_api.services.auth_service import AuthService
from quotes_api.services.portal_service import PortalService
from quotes_api.services.quote_service import QuoteService
from quotes_api.services.registration_service import RegistrationService


def get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", settings)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    return request.app.state.rate_limiter


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service


def get_registration_service(request: Request) -> RegistrationService:
    return request.app.state.registration_service


def get_portal_service(request: Request) -> PortalService:
    return request.app.state.portal_service
