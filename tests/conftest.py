"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It points the settings at the testing environment, an in-memory SQLite
database and cheap Argon2 parameters before anything imports them.
"""

import base64
import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("HASH_TIME_COST", "1")
os.environ.setdefault("HASH_MEMORY_COST", "8")
os.environ.setdefault("HASH_PARALLELISM", "1")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from quotes_api.adapters.hashing.argon2_hasher import Argon2SecretHasher  # noqa: E402
from quotes_api.adapters.store.in_memory import InMemoryUserStore  # noqa: E402
from quotes_api.core.app_factory import create_app  # noqa: E402
from quotes_api.core.config import (  # noqa: E402
    AppSettings,
    DatabaseSettings,
    HashSettings,
    Settings,
)


def basic_auth(username: str, password: str) -> dict[str, str]:
    """Build an ``Authorization: Basic`` header for the given credentials."""
    token = base64.b64encode(f"{username}:{password}".encode("ascii")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def build_settings(**app_overrides) -> Settings:
    """Settings with an isolated in-memory database and fast hashing."""
    return Settings(
        app=AppSettings(**app_overrides),
        db=DatabaseSettings(url="sqlite://"),
        hash=HashSettings(time_cost=1, memory_cost=8, parallelism=1),
    )


@pytest.fixture
def make_app() -> Callable[..., FastAPI]:
    """Factory fixture: ``make_app(auth_scheme="api_key")`` etc."""

    def _make(**app_overrides) -> FastAPI:
        return create_app(build_settings(**app_overrides))

    return _make


@pytest.fixture
def app(make_app) -> FastAPI:
    return make_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def api_key_app(make_app) -> FastAPI:
    return make_app(auth_scheme="api_key")


@pytest.fixture
def api_key_client(api_key_app: FastAPI) -> TestClient:
    return TestClient(api_key_app)


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def hasher() -> Argon2SecretHasher:
    return Argon2SecretHasher(time_cost=1, memory_cost=8, parallelism=1)
