"""
Application settings loaded from environment variables.
It centralizes the process-level configuration shared by the API, logging and DDL helpers.
Database credentials are supplied externally; the URL is composed from them unless DATABASE_URL is set.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final
from urllib.parse import quote

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = (
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
)

DEFAULT_ENV_VALUES: Final[dict[str, str]] = {
    "PROJECT_NAME": "product-api",
    "ENV": "local",
    "LOG_LEVEL": "INFO",
    "POSTGRES_HOST": "localhost",
    "POSTGRES_PORT": "5432",
}


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int
    POSTGRES_DB: str
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    DATABASE_URL: str | None = None

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return build_database_url(
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            database=self.POSTGRES_DB,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
        )


def build_database_url(
    *,
    username: str,
    password: str,
    database: str,
    host: str = "localhost",
    port: int = 5432,
) -> str:
    """Compose a psycopg2 SQLAlchemy URL from connection parameters."""

    return (
        f"postgresql+psycopg2://{quote(username, safe='')}:{quote(password, safe='')}"
        f"@{host}:{port}/{database}"
    )


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate environment settings from `.env` and process environment."""

    if load_env:
        load_dotenv()

    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        missing_values = ", ".join(sorted(missing))
        raise RuntimeError(
            f"Missing required environment variables: {missing_values}. "
            "Populate these values in `.env` before starting the application."
        )

    values = {**DEFAULT_ENV_VALUES, **{key: value for key, value in os.environ.items() if value}}
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
