"""Pydantic schemas for account portal requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PortalRequest(BaseModel):
    """Common portal body.

    ``username`` is only echoed by clients for display; authorization always
    uses the identity from the Authorization header.
    """

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(default=None, description="Ignored for authorization.")


class ChangeEmailRequest(PortalRequest):
    new_email: str = Field(..., alias="newEmail")


class ChangePasswordRequest(PortalRequest):
    new_password: str = Field(..., alias="newPassword")


class CurrentEmailResponse(BaseModel):
    email: str
