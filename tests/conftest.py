"""
Shared test configuration.
It provides deterministic environment values and a throwaway SQLite product table.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import create_engine

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from product_api.api.api_config import get_api_config  # noqa: E402
from product_api.api.db_access import DatabaseClient  # noqa: E402
from product_api.common.settings import get_settings  # noqa: E402
from tests.api.support import create_sqlite_product_table  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure required environment variables are present during tests."""

    defaults = {
        "PROJECT_NAME": "test-project",
        "ENV": "test",
        "LOG_LEVEL": "INFO",
        "POSTGRES_HOST": "localhost",
        "POSTGRES_PORT": "5432",
        "POSTGRES_DB": "products",
        "POSTGRES_USER": "product_user",
        "POSTGRES_PASSWORD": "product_password",
    }

    for key, value in defaults.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)

    get_settings.cache_clear()
    get_api_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_api_config.cache_clear()


@pytest.fixture()
def sqlite_db(tmp_path: Path) -> Iterator[DatabaseClient]:
    """DatabaseClient over a fresh SQLite file holding an empty product table."""

    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'products.db'}", future=True)
    create_sqlite_product_table(engine)
    client = DatabaseClient(engine=engine)
    try:
        yield client
    finally:
        client.close()
