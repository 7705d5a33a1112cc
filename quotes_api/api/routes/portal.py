"""Account portal endpoints (Basic auth, username/password accounts only)."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from quotes_api.api.dependencies import get_portal_service
from quotes_api.core.auth import authenticate_portal_user
from quotes_api.schemas.portal import (
    ChangeEmailRequest,
    ChangePasswordRequest,
    CurrentEmailResponse,
    PortalRequest,
)
from quotes_api.schemas.register import MessageResponse
from quotes_api.services.portal_service import PortalService

router = APIRouter(prefix="/portal", tags=["Portal"])

AuthenticatedUser = Annotated[str, Depends(authenticate_portal_user)]
Portal = Annotated[PortalService, Depends(get_portal_service)]
OptionalBody = Annotated[PortalRequest | None, Body()]


@router.post("/sign-in", response_model=MessageResponse)
async def sign_in(identifier: AuthenticatedUser, body: OptionalBody = None) -> MessageResponse:
    """Check credentials; all the work happens in the auth dependency."""
    return MessageResponse(message="User is authentic.")


@router.post("/get-current-email", response_model=CurrentEmailResponse)
async def get_current_email(
    identifier: AuthenticatedUser,
    portal: Portal,
    body: OptionalBody = None,
) -> CurrentEmailResponse:
    return CurrentEmailResponse(email=await portal.get_current_email(identifier))


@router.post("/change-email", response_model=MessageResponse)
async def change_email(
    identifier: AuthenticatedUser,
    portal: Portal,
    body: ChangeEmailRequest,
) -> MessageResponse:
    await portal.change_email(identifier, body.new_email)
    return MessageResponse(message="Email updated successfully.")


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    identifier: AuthenticatedUser,
    portal: Portal,
    body: ChangePasswordRequest,
) -> MessageResponse:
    await portal.change_password(identifier, body.new_password)
    return MessageResponse(message="Password updated successfully.")


@router.post("/delete-account", response_model=MessageResponse)
async def delete_account(
    identifier: AuthenticatedUser,
    portal: Portal,
    body: OptionalBody = None,
) -> MessageResponse:
    await portal.delete_account(identifier)
    return MessageResponse(message="Account deleted successfully.")
