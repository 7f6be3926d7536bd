"""
authcore.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for signer, store and credentials.
- Hide secrets from repr/logging (JWT key, principal secrets).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PrincipalSettings(BaseModel):
    # One entry of the fixed credential list (AUTHCORE_PRINCIPALS is a JSON array of these).
    username: str = Field(min_length=1)
    secret: str = Field(repr=False)
    roles: list[str] = Field(default_factory=list)


class Settings(BaseSettings):
    """
    Env-driven configuration, loaded once per process.

    Defaults are safe for local dev only; `jwt_secret` must be overridden outside dev.
    """

    model_config = SettingsConfigDict(env_prefix="AUTHCORE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "authcore"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Token signing
    jwt_alg: str = "HS256"
    jwt_issuer: str = "authcore"
    jwt_audience: str = "authcore-api"
    jwt_secret: str = Field(default="dev-secret-change-me-please-32-bytes", repr=False)

    # Lifetimes
    access_token_minutes: int = Field(default=30, ge=1)
    refresh_token_days: int = Field(default=7, ge=1)
    refresh_token_bytes: int = Field(default=64, ge=32)

    # Fixed credential list
    principals: list[PrincipalSettings] = Field(default_factory=list)

    # Refresh token persistence
    refresh_store: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./authcore.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The principal list is read exactly once here; nothing mutates it afterwards.
