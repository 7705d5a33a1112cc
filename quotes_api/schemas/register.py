"""Pydantic schemas for registration requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterUserRequest(BaseModel):
    """Username/password sign-up body.

    Types are checked here; the account patterns are checked by the service
    so every rule violation maps to the same ``malformed_inputs`` error.
    """

    username: str = Field(..., description="1-20 letters, digits or underscores.")
    email: str = Field(..., description="Contact address, at most 254 characters, must contain '@'.")
    password: str = Field(..., description="8-128 letters or digits.")


class RegisterApiClientRequest(BaseModel):
    """API-key sign-up body."""

    name: str = Field(..., description="Display name of the client.")
    email: str = Field(..., description="Contact address, must be unique.")
    reason: str | None = Field(
        default=None,
        description="Hidden honeypot field; must be left empty.",
    )


class ApiKeysResponse(BaseModel):
    """Credentials issued once at API-key registration."""

    model_config = ConfigDict(populate_by_name=True)

    identity_key: str = Field(..., alias="identityKey")
    secret_key: str = Field(..., alias="secretKey")


class MessageResponse(BaseModel):
    message: str
