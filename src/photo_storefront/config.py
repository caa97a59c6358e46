"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_ENV_FILES = (f".env.{_ENVIRONMENT}", ".env")


def default_storage_path() -> Path:
    """Return the default location of the local storefront store."""
    return Path.home() / ".photo_storefront" / "storage.json"


class ClientSettings(BaseSettings):
    """Storefront client settings loaded from environment variables."""

    api_url: str = "http://localhost:4000/api"
    storage_path: Path = default_storage_path()
    request_timeout_seconds: float = 15.0

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=_ENV_FILES,
        extra="ignore",
    )


class ServerSettings(BaseSettings):
    """Storefront API settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    token_secret: str
    token_ttl_seconds: int = 60 * 60 * 24
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES,
        extra="ignore",
    )
