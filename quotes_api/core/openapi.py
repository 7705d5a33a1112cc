"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- The security scheme of the active credential flow (HTTP Basic, or the
  ``identity-key``/``secret-key`` header pair)
- Tags metadata
- Per-path exemptions for endpoints that need no credentials

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from quotes_api.core.config import AuthScheme

_PUBLIC_PATH_SUFFIXES = ("/health", "/register")

_TAGS = [
    {"name": "Quotes", "description": "Random quotes, authenticated and rate limited."},
    {"name": "Register", "description": "Account creation."},
    {"name": "Portal", "description": "Self-service account management (Basic auth)."},
    {"name": "Health", "description": "Liveness checks."},
]


def _security_schemes(auth_scheme: AuthScheme) -> tuple[dict[str, Any], list[dict[str, list]]]:
    if auth_scheme == "api_key":
        schemes = {
            "IdentityKey": {
                "type": "apiKey",
                "in": "header",
                "name": "identity-key",
                "description": "identity-<64 hex> key issued at registration.",
            },
            "SecretKey": {
                "type": "apiKey",
                "in": "header",
                "name": "secret-key",
                "description": "secret-<64 hex> key issued once at registration.",
            },
        }
        return schemes, [{"IdentityKey": [], "SecretKey": []}]

    schemes = {
        "BasicAuth": {
            "type": "http",
            "scheme": "basic",
            "description": "username:password of a registered account.",
        }
    }
    return schemes, [{"BasicAuth": []}]


def apply_openapi_customizations(app: FastAPI, *, auth_scheme: AuthScheme = "basic") -> None:
    """Patch FastAPI's OpenAPI generation to add metadata and security.

    - Injects components.securitySchemes for the active credential flow
    - Marks all operations as requiring it by default, then exempts health
      and registration endpoints by setting ``security: []``
    - Portal operations always use HTTP Basic
    - Adds tags metadata if not present
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        schemes, default_security = _security_schemes(auth_scheme)
        for name, definition in schemes.items():
            security_schemes.setdefault(name, definition)
        security_schemes.setdefault("BasicAuth", _security_schemes("basic")[0]["BasicAuth"])

        schema.setdefault("security", default_security)

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in _TAGS:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                if path.endswith(_PUBLIC_PATH_SUFFIXES):
                    method_obj["security"] = []
                elif path.startswith("/portal/"):
                    method_obj["security"] = [{"BasicAuth": []}]

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
