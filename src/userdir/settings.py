"""
userdir.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `USERDIR_`).
    Defaults are safe for local dev; prod must override the JWT secret.
    """

    model_config = SettingsConfigDict(env_prefix="USERDIR_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "userdir-service"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8081
    forwarded_allow_ips: str = "127.0.0.1"

    # Token issuing
    jwt_alg: str = "HS256"
    jwt_issuer: str = "userdir-service"
    jwt_audience: str = "userdir-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_minutes: int = Field(default=15, ge=1)

    # Credential recovery
    otp_ttl_minutes: int = Field(default=15, ge=1)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./userdir.db"

    # Outbound email service (expects POST {base}/emails/v1/send)
    notification_base_url: str = "http://localhost:8080/api"
    notification_timeout_seconds: float = 5.0

    # Upper bound for a single service operation (store + hashing + dispatch).
    operation_timeout_seconds: float = 10.0

    # Raw identity header consulted when the edge did not attach an identity.
    identity_header: str = "user"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every other module reads configuration through `get_settings()` or an injected
# `Settings` instance; nothing reads os.environ directly.
