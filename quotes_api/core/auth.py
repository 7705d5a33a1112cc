"""Request authentication dependencies.

Two header shapes exist, and each deployment serves exactly one of them
(``APP_AUTH_SCHEME``):
- ``basic``: ``Authorization: Basic base64(username:password)``
- ``api_key``: ``identity-key`` and ``secret-key`` headers

The account portal always uses Basic auth.

Usage:
    @router.get("/quotes")
    async def serve_quote(identifier: str = Depends(enforce_rate_limit)): ...
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Header

from quotes_api.api.dependencies import get_auth_service, get_settings
from quotes_api.core.config import Settings
from quotes_api.services.auth_service import AuthService
from quotes_api.services.request_validation import (
    parse_api_key_headers,
    parse_basic_authorization,
)

logger = logging.getLogger(__name__)


async def authenticate_request(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    cfg: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
    identity_key: Annotated[str | None, Header(alias="identity-key")] = None,
    secret_key: Annotated[str | None, Header(alias="secret-key")] = None,
) -> str:
    """Validate the configured credential headers and authenticate them.

    Args:
        auth_service: Authenticator bound to the credential store.
        cfg: Active settings (selects the header scheme).
        authorization: ``Authorization`` header (basic scheme).
        identity_key: ``identity-key`` header (api_key scheme).
        secret_key: ``secret-key`` header (api_key scheme).

    Returns:
        The authenticated user's identifier.

    Raises:
        ValidationAppError: Headers missing or malformed (400).
        AuthenticationAppError: Unknown identity or wrong secret (401).
        InternalAppError: Stored hash could not be verified (500).
    """
    if cfg.app.auth_scheme == "api_key":
        keys = parse_api_key_headers(identity_key, secret_key)
        identifier, secret = keys.identity_key, keys.secret_key
    else:
        credentials = parse_basic_authorization(authorization)
        identifier, secret = credentials.username, credentials.password

    profile = await auth_service.authenticate(identifier, secret)
    return profile.identifier


async def authenticate_portal_user(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Basic-auth dependency for the account portal.

    Returns:
        The authenticated username.
    """
    credentials = parse_basic_authorization(authorization)
    profile = await auth_service.authenticate(credentials.username, credentials.password)
    return profile.identifier
