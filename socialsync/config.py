"""
Runtime configuration for the API server and the interaction client.

Values come from the environment first, then from the .env file in the
project root. The client reads its own settings so it can run without any
server database configured.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]
ENV_PATH = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_PATH, override=False)

_ENV_CONFIG = SettingsConfigDict(
    env_file=str(ENV_PATH),
    env_file_encoding="utf-8",
    extra="ignore"
)


class Settings(BaseSettings):
    # Required; there is no default database.
    database_url: str = Field(..., alias="DATABASE_URL")

    app_name: str = Field(default="SocialSync", alias="APP_NAME")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")

    # Tokens (the signing key itself is read by the auth service)
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expires_minutes: int = Field(default=1440, alias="JWT_EXPIRES_MINUTES")

    search_result_limit: int = Field(default=20, alias="SEARCH_RESULT_LIMIT")

    model_config = _ENV_CONFIG


class ClientSettings(BaseSettings):
    api_base_url: str = Field(default="http://localhost:8000", alias="API_BASE_URL")
    api_timeout: float = Field(default=10.0, alias="API_TIMEOUT")
    toast_history: int = Field(default=20, alias="TOAST_HISTORY")

    model_config = _ENV_CONFIG


@lru_cache()
def get_settings() -> Settings:
    return Settings()


@lru_cache()
def get_client_settings() -> ClientSettings:
    return ClientSettings()


__all__ = ["ClientSettings", "Settings", "get_client_settings", "get_settings"]
