"""Syntactic validation of credentials and account fields.

Everything here is pure: no store access, no hashing, no logging of values.
Each failed check raises ``ValidationAppError`` with its own code so clients
can tell which rule they broke.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from quotes_api.core.errors import ValidationAppError

IDENTITY_PREFIX = "identity-"
SECRET_PREFIX = "secret-"

API_KEY_PATTERN = re.compile(r"^(identity|secret)-[0-9a-f]{64}$")
KEY_HEX_PATTERN = re.compile(r"^[0-9a-f]{64}$")
BASIC_HEADER_PATTERN = re.compile(r"^Basic [a-zA-Z0-9+/=]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{1,20}$")
PASSWORD_PATTERN = re.compile(r"^[a-zA-Z0-9]{8,128}$")
BASIC_CREDENTIALS_PATTERN = re.compile(r"^[a-zA-Z0-9_]{1,20}:[a-zA-Z0-9]{8,128}$")

MAX_EMAIL_CHARS = 254


@dataclass(frozen=True)
class ApiKeyCredentials:
    identity_key: str
    secret_key: str


@dataclass(frozen=True)
class BasicCredentials:
    username: str
    password: str


def parse_api_key_headers(identity_key: str | None, secret_key: str | None) -> ApiKeyCredentials:
    """Validate the ``identity-key`` / ``secret-key`` header pair.

    Values are lowercased before any check, so upper-case hex is accepted.

    Args:
        identity_key: Raw ``identity-key`` header value, or None if absent.
        secret_key: Raw ``secret-key`` header value, or None if absent.

    Returns:
        ApiKeyCredentials with the normalized (lowercased) keys.

    Raises:
        ValidationAppError: Missing header, missing prefix, missing or
            malformed hexadecimal part.
    """
    if identity_key is None or secret_key is None:
        raise ValidationAppError(
            code="missing_api_key_headers",
            message="Missing header(s): identity-key and/or secret-key",
        )

    identity_key = identity_key.lower()
    secret_key = secret_key.lower()

    if not identity_key.startswith(IDENTITY_PREFIX) or not secret_key.startswith(SECRET_PREFIX):
        raise ValidationAppError(
            code="missing_api_key_prefix",
            message='API keys must have "identity-" or "secret-" prefixes.',
        )

    identity_hex = identity_key[len(IDENTITY_PREFIX):]
    secret_hex = secret_key[len(SECRET_PREFIX):]
    if not identity_hex or not secret_hex:
        raise ValidationAppError(
            code="missing_api_key_hex",
            message="The identity and/or secret key is missing its hexadecimal portion.",
        )

    if not KEY_HEX_PATTERN.fullmatch(identity_hex) or not KEY_HEX_PATTERN.fullmatch(secret_hex):
        raise ValidationAppError(
            code="malformed_api_key_hex",
            message=(
                "The hexadecimal part of the identity and/or secret key is invalid. "
                "It must be exactly 64 characters of [0-9a-f]."
            ),
        )

    return ApiKeyCredentials(identity_key=identity_key, secret_key=secret_key)


def parse_basic_authorization(header: str | None) -> BasicCredentials:
    """Validate an ``Authorization: Basic <base64(username:password)>`` header.

    Args:
        header: Raw Authorization header value, or None if absent.

    Returns:
        BasicCredentials with the decoded username and password.

    Raises:
        ValidationAppError: Missing header, wrong scheme or alphabet, bad
            base64, or credentials that do not match the account patterns.
    """
    if header is None:
        raise ValidationAppError(
            code="missing_authorization",
            message="Missing header: Authorization",
        )

    if not BASIC_HEADER_PATTERN.fullmatch(header):
        raise ValidationAppError(
            code="malformed_authorization",
            message='Malformed header: Authorization. Must be: "Basic <base64 credentials>"',
        )

    encoded = header.split(" ", 1)[1]
    try:
        credentials = base64.b64decode(encoded, validate=True).decode("ascii")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise ValidationAppError(
            code="malformed_credentials",
            message="Malformed header: Authorization. Decoded base64 value is not valid.",
        ) from exc

    if not BASIC_CREDENTIALS_PATTERN.fullmatch(credentials):
        raise ValidationAppError(
            code="malformed_credentials",
            message="Malformed header: Authorization. Decoded base64 value is not valid.",
        )

    username, password = credentials.split(":", 1)
    return BasicCredentials(username=username, password=password)


def is_valid_api_key(value: str) -> bool:
    """True if ``value`` is a well-formed identity or secret key."""
    return API_KEY_PATTERN.fullmatch(value) is not None


def is_valid_username(username: str) -> bool:
    return USERNAME_PATTERN.fullmatch(username) is not None


def is_valid_email(email: str) -> bool:
    # Length cap from RFC 5321 path limits; only "@" presence is checked.
    return 0 < len(email) <= MAX_EMAIL_CHARS and "@" in email


def is_valid_password(password: str) -> bool:
    return PASSWORD_PATTERN.fullmatch(password) is not None


def validate_email(email: str) -> str:
    """Return ``email`` unchanged or raise ``invalid_email``."""
    if not is_valid_email(email):
        raise ValidationAppError(
            code="invalid_email",
            message="Email address is invalid.",
            details={"field": "email", "max_length": MAX_EMAIL_CHARS},
        )
    return email


def validate_password(password: str) -> str:
    """Return ``password`` unchanged or raise ``invalid_password``."""
    if not is_valid_password(password):
        raise ValidationAppError(
            code="invalid_password",
            message="Password does not meet requirements.",
            details={
                "field": "password",
                "hint": "8 to 128 letters or digits",
            },
        )
    return password
