# This file defines runtime settings for the API layer in one place.
# It exists so list defaults, the product table name and CORS origins can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# It also validates the table name to prevent unsafe SQL identifier usage.

from __future__ import annotations

import os
import re
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from product_api.common.settings import get_settings

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Product API"
    app_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    log_level: str = "INFO"
    database_url: str
    default_list_count: int = 10
    max_list_count: int = 100
    product_table_name: str = "product"
    enable_request_logging: bool = True
    allowed_origins: list[str] = Field(default_factory=list)
    allowed_table_names: set[str] = Field(default_factory=lambda: {"product"})

    @field_validator("product_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("default_list_count", "max_list_count")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @model_validator(mode="after")
    def validate_list_bounds(self) -> ApiConfig:
        if self.default_list_count > self.max_list_count:
            raise ValueError("default_list_count must be <= max_list_count.")
        return self

    def validate_table_name(self, table_name: str) -> str:
        if not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Unsafe SQL identifier: {table_name!r}")
        if table_name not in self.allowed_table_names:
            raise ValueError(f"Table name is not in allowlist: {table_name!r}")
        return table_name


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    settings = get_settings()
    product_table_name = os.getenv("API_PRODUCT_TABLE_NAME", "product")

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Product API"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": settings.ENV,
        "log_level": settings.LOG_LEVEL,
        "database_url": settings.database_url,
        "default_list_count": _env_int("API_DEFAULT_LIST_COUNT", 10),
        "max_list_count": _env_int("API_MAX_LIST_COUNT", 100),
        "product_table_name": product_table_name,
        "enable_request_logging": _env_bool("API_ENABLE_REQUEST_LOGGING", True),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "allowed_table_names": {"product", product_table_name},
    }

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
