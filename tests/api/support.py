# This file provides shared helpers for API endpoint tests.
# It exists so tests can build an app around a SQLite product table or a fake store.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.engine import Engine

from product_api.api.api_config import ApiConfig
from product_api.api.app import create_app
from product_api.api.dependencies import get_product_store

SQLITE_PRODUCT_DDL = """
CREATE TABLE product (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    price NUMERIC(10,2) NOT NULL DEFAULT 0.00,
    createdOn TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT uk_product_name UNIQUE (name)
)
"""


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Product API",
        "app_version": "0.1.0",
        "environment": "test",
        "log_level": "INFO",
        "database_url": "sqlite+pysqlite:///:memory:",
        "default_list_count": 10,
        "max_list_count": 100,
        "product_table_name": "product",
        "enable_request_logging": False,
        "allowed_origins": [],
        "allowed_table_names": {"product"},
    }
    values.update(overrides)
    return ApiConfig(**values)


def create_sqlite_product_table(engine: Engine) -> None:
    with engine.begin() as connection:
        connection.execute(text(SQLITE_PRODUCT_DDL))


def add_products(engine: Engine, count: int) -> None:
    """Insert `count` products directly, bypassing the API."""

    count = max(count, 1)
    with engine.begin() as connection:
        for index in range(count):
            connection.execute(
                text("INSERT INTO product (name, price, createdOn) VALUES (:name, :price, :created_on)"),
                {
                    "name": f"Product{index}",
                    "price": float((index + 1) * 10),
                    "created_on": "2021-04-15 21:00:00.000000",
                },
            )


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"product"}
        self.closed = False

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables

    def close(self) -> None:
        self.closed = True


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    product_store: Any | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient for an app built around the given database client."""

    app = create_app(config=config or build_test_config(), db=db_client or FakeDBClient())
    if product_store is not None:
        app.dependency_overrides[get_product_store] = lambda: product_store

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
