"""DDL helpers for the product table."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import Engine

DDL_ORDER = [
    "product.sql",
]

DEFAULT_DDL_DIR = Path(__file__).resolve().parents[2] / "sql" / "ddl"


def apply_product_ddl(engine: Engine, ddl_dir: Path | None = None) -> None:
    """Apply product DDL files in deterministic order."""

    ddl_path = ddl_dir or DEFAULT_DDL_DIR
    with engine.begin() as connection:
        for ddl_file in DDL_ORDER:
            sql_text = (ddl_path / ddl_file).read_text(encoding="utf-8")
            connection.exec_driver_sql(sql_text)


def reset_product_table(engine: Engine) -> None:
    """Delete every product and restart the id sequence at 1.

    Only meant for test harnesses; a running service never resets the sequence.
    """

    with engine.begin() as connection:
        connection.execute(text("DELETE FROM product"))
        if engine.dialect.name == "postgresql":
            connection.execute(text("ALTER SEQUENCE product_id_seq RESTART WITH 1"))
        elif engine.dialect.name == "sqlite":
            has_sequence = connection.execute(
                text("SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'")
            ).first()
            if has_sequence is not None:
                connection.execute(text("DELETE FROM sqlite_sequence WHERE name = 'product'"))
