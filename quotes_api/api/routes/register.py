"""Registration endpoints.

Only one of the two routers is mounted, depending on ``APP_AUTH_SCHEME``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from quotes_api.api.dependencies import get_registration_service
from quotes_api.schemas.register import (
    ApiKeysResponse,
    MessageResponse,
    RegisterApiClientRequest,
    RegisterUserRequest,
)
from quotes_api.services.registration_service import RegistrationService

router = APIRouter(tags=["Register"])
api_key_router = APIRouter(tags=["Register"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={
        400: {"description": "Missing or malformed inputs."},
        409: {"description": "Username or email already registered."},
    },
)
async def register_user(
    body: RegisterUserRequest,
    registration: Annotated[RegistrationService, Depends(get_registration_service)],
) -> Response:
    """Create a username/password account. Responds with a bare 201."""
    await registration.register_user(body.username, body.email, body.password)
    return Response(status_code=status.HTTP_201_CREATED)


@api_key_router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiKeysResponse,
    responses={
        200: {"model": MessageResponse, "description": "Honeypot submission, nothing stored."},
        400: {"description": "Missing name/email or invalid email."},
        409: {"description": "Email already registered."},
    },
)
async def register_api_client(
    body: RegisterApiClientRequest,
    registration: Annotated[RegistrationService, Depends(get_registration_service)],
):
    """Issue an identity/secret key pair.

    The secret key is returned exactly once; only its hash is stored.
    """
    issued = await registration.register_api_client(body.name, body.email, body.reason)
    if issued is None:
        # Bots get the same shape of success a human would expect.
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "Sign up successful"},
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ApiKeysResponse(
            identity_key=issued.identity_key,
            secret_key=issued.secret_key,
        ).model_dump(by_alias=True),
    )
