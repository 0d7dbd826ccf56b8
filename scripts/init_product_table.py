# This file creates or resets the product table for local development and test databases.
# Schema management for deployed environments is handled outside this repository.
# ruff: noqa: E402

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sqlalchemy import create_engine

from product_api.common.ddl import apply_product_ddl, reset_product_table
from product_api.common.logging import configure_logging
from product_api.common.settings import get_settings

LOGGER = logging.getLogger("product_api.ddl")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or reset the product table")
    parser.add_argument("--reset", action="store_true", help="Delete all rows and restart the id sequence")
    parser.add_argument("--database-url", default=None, help="Override the configured database URL")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    configure_logging()
    database_url = args.database_url or get_settings().database_url
    engine = create_engine(database_url, future=True)
    try:
        apply_product_ddl(engine)
        LOGGER.info("product table is present")
        if args.reset:
            reset_product_table(engine)
            LOGGER.info("product table reset")
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
