"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Bundled quote dataset, used unless APP_QUOTES_CSV_PATH points elsewhere
DEFAULT_QUOTES_CSV = Path(__file__).resolve().parents[1] / "data" / "quotes.csv"

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings.
# Nested BaseSettings don't inherit env_file, and variables already exported
# by the process (or by tests) take precedence over the file.
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=False)


AuthScheme = Literal["basic", "api_key"]


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    auth_scheme: AuthScheme = Field(
        "basic",
        description=(
            "Credential flow served by this deployment: 'basic' for "
            "username/password accounts with the portal, 'api_key' for "
            "generated identity/secret key pairs"
        ),
    )
    rate_limit_enabled: bool = Field(
        True,
        description="Enable the per-user request throttle on /quotes",
    )
    rate_limit_interval_ms: int = Field(
        1000,
        description="Minimum interval between two accepted requests of the same user",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include Retry-After and X-RateLimit-* headers when throttling",
    )
    quotes_csv_path: str | None = Field(
        None,
        description="Path to the quotes CSV dataset (defaults to the bundled file)",
    )
    max_name_chars: int = Field(
        1000,
        description="Registration names longer than this are truncated",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )

    @property
    def quotes_csv(self) -> Path:
        return Path(self.quotes_csv_path) if self.quotes_csv_path else DEFAULT_QUOTES_CSV


class DatabaseSettings(BaseSettings):
    """Relational store configuration."""

    url: str = Field(
        "sqlite:///./data/quotes_api.db",
        description="SQLAlchemy database URL (use 'sqlite://' for an in-memory store)",
    )
    echo: bool = Field(
        False,
        description="Log every SQL statement emitted by SQLAlchemy",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
    )


class HashSettings(BaseSettings):
    """Argon2id parameters for secret and password hashing."""

    time_cost: int = Field(3, description="Number of Argon2 iterations", ge=1)
    memory_cost: int = Field(
        65536,
        description="Memory usage in KiB",
        ge=8,
    )
    parallelism: int = Field(4, description="Number of parallel lanes", ge=1)

    model_config = SettingsConfigDict(
        env_prefix="HASH_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field(
        "json",
        description="Log line format",
    )
    output: Literal["stdout", "file"] = Field(
        "stdout",
        description="Where log lines are written",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output=file (defaults to logs/app.log)",
    )
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated log files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


def _build_app_settings() -> AppSettings:
    """Build app settings from environment.

    Pydantic Settings (v2) populates values from environment variables.
    However, static type checkers often treat required fields as required
    constructor arguments, which is not how BaseSettings is intended to be used.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_db_settings() -> DatabaseSettings:
    return DatabaseSettings()  # type: ignore[call-arg]


def _build_hash_settings() -> HashSettings:
    return HashSettings()  # type: ignore[call-arg]


def _build_log_settings() -> LogSettings:
    return LogSettings()  # type: ignore[call-arg]


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.

    Environments:
    - development: Local development (DEBUG=true)
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    db: DatabaseSettings = Field(default_factory=_build_db_settings)
    hash: HashSettings = Field(default_factory=_build_hash_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
