"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env")

    COOKIDOO_EMAIL: str = Field(...)
    COOKIDOO_PASSWORD: str = Field(...)
    # Service-level Authorization header sent to the OAuth token endpoint
    COOKIDOO_AUTH_HEADER: str = Field(...)
    COOKIDOO_BASE_URL: str = Field(default="https://de.tmmobile.vorwerk-digital.com")
    COOKIDOO_REQUEST_TIMEOUT_SECONDS: float = Field(default=30.0)
    COOKIDOO_USER_AGENT: str = Field(default="AlexaCookidooSkill/1.0")

    SKILL_LOG_LEVEL: str = Field(default="info")
    SKILL_LOG_DIR: Path | None = Field(default=None)

    # Rejects envelopes addressed to another skill when set
    ALEXA_SKILL_ID: str | None = Field(default=None)

    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_HEALTHCHECK_AUTH: bool = Field(default=True)


settings = Settings()  # type: ignore[call-arg]
config = settings


__all__ = ["Settings", "settings", "config"]
