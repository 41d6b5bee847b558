"""Quire settings.

Every field maps to an upper-cased environment variable (``JWT_SECRET_KEY``,
``POSTGRES_HOST``, ``API_COOKIE_SECURE``...). Real environment variables win
over the ``.env`` file, which is looked up in this order:

1. ``QUIRE_ENV_FILE`` (absolute, or relative to the project root)
2. ``config/.env.dev`` for local development
3. ``config/.env`` for Docker deployments
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ROOT_MARKERS = ("config", "pyproject.toml", ".git")


def _project_root() -> Path:
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def get_config_dir() -> Path:
    """Directory holding the ``.env`` files (``QUIRE_CONFIG_DIR`` overrides)."""
    override = os.environ.get("QUIRE_CONFIG_DIR")
    if override:
        return Path(override).expanduser().resolve()
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get("QUIRE_ENV_FILE")
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _project_root() / path
        return path if path.is_file() else None

    config_dir = get_config_dir()
    for name in (".env.dev", ".env"):
        if (config_dir / name).is_file():
            return config_dir / name
    return None


class Settings(BaseSettings):
    """Runtime configuration for the API, the CLI and the auth layer.

    ``jwt_secret_key`` and ``postgres_password`` have no defaults; loading
    settings without them fails. ``quire secrets generate`` prints fresh
    values for both.
    """

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret_key: SecretStr = Field(description="HS256 signing key")
    postgres_password: SecretStr

    app_name: str = "Quire"
    debug: bool = False
    log_level: str = Field(default="INFO", description="Root log level")

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "quire"
    storage_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for one moderation or lifecycle operation",
    )

    api_host: str = "0.0.0.0"  # NOQA: S104
    api_port: int = 8000
    api_debug: bool = Field(default=False, description="Expose /docs and /openapi.json")
    # Comma separated; empty means no cross-origin access
    api_cors_origins: str = ""
    api_cookie_secure: bool = True
    api_cookie_samesite: Literal["lax", "strict", "none"] = "strict"
    api_cookie_domain: str | None = None

    jwt_access_token_expire_minutes: int = Field(default=15, gt=0)
    jwt_refresh_token_expire_days: int = Field(default=7, gt=0)
    password_hash_rounds: int = Field(default=12, ge=4, le=31)

    registration_enabled: bool = True
    # Read by `quire users create-admin`; no default
    bootstrap_admin_password: SecretStr | None = None

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_origins(cls, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value)
        return str(value or "")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        return [
            origin.strip()
            for origin in self.api_cors_origins.split(",")
            if origin.strip()
        ]


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
