# This file implements the data access layer for the product table.
# It exists so routers never build SQL: statement text and row decoding live only here.
# Every statement binds caller values as parameters and declares column types so the driver
# handles decimal and timestamp encoding. Storage failures surface as DataAccessError.

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from sqlalchemy import DateTime, Integer, Numeric, String, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from product_api.api.api_config import ApiConfig
from product_api.api.db_access import DatabaseClient
from product_api.api.error_handlers import DataAccessError, NotFoundError

LOGGER = logging.getLogger("product_api.store")

PRICE_QUANTUM = Decimal("0.01")
# Largest magnitude NUMERIC(10, 2) holds.
MAX_PRICE = Decimal("99999999.99")

_RESULT_COLUMNS = {
    "id": Integer(),
    "name": String(),
    "price": Numeric(10, 2, asdecimal=True),
    "created_on": DateTime(),
}


@dataclass(frozen=True)
class Product:
    name: str
    price: Decimal
    created_on: datetime | None = None
    id: int | None = None


def normalize_price(value: Decimal | float | int | str) -> Decimal:
    """Return the price at the fixed two-decimal precision it is stored with."""

    try:
        return Decimal(str(value)).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"price {value!r} cannot be stored with two decimal places") from exc


def to_storage_timestamp(value: datetime) -> datetime:
    """Convert to the naive UTC value kept in the TIMESTAMP column."""

    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_timestamp(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@contextmanager
def _data_access(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        message = _driver_message(exc)
        LOGGER.warning("product %s failed: %s", operation, message)
        raise DataAccessError(message) from exc


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc).strip()


class ProductStore:
    """Parameterized CRUD statements over the product table."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.product_table = self.config.validate_table_name(self.config.product_table_name)

        self._list_query = text(
            f"""
            SELECT id, name, price, createdOn AS created_on
            FROM {self.product_table}
            ORDER BY id ASC
            LIMIT :count OFFSET :start
            """
        ).columns(**_RESULT_COLUMNS)
        self._get_query = text(
            f"""
            SELECT id, name, price, createdOn AS created_on
            FROM {self.product_table}
            WHERE id = :id
            """
        ).columns(**_RESULT_COLUMNS)
        self._create_query = (
            text(
                f"""
                INSERT INTO {self.product_table} (name, price, createdOn)
                VALUES (:name, :price, :created_on)
                RETURNING id
                """
            )
            .bindparams(
                bindparam("price", type_=Numeric(10, 2)),
                bindparam("created_on", type_=DateTime()),
            )
            .columns(id=Integer())
        )
        self._update_query = (
            text(
                f"""
                UPDATE {self.product_table}
                SET name = :name, price = :price
                WHERE id = :id
                RETURNING id, name, price, createdOn AS created_on
                """
            )
            .bindparams(bindparam("price", type_=Numeric(10, 2)))
            .columns(**_RESULT_COLUMNS)
        )
        self._delete_query = text(f"DELETE FROM {self.product_table} WHERE id = :id")

    def list_products(self, *, start: int, count: int) -> list[Product]:
        with _data_access("list"):
            rows = self.db.fetch_all(self._list_query, {"count": count, "start": start})
        return [self._decode(row, operation="list") for row in rows]

    def get_product(self, product_id: int) -> Product:
        with _data_access("get"):
            row = self.db.fetch_one(self._get_query, {"id": product_id})
        if row is None:
            raise NotFoundError()
        return self._decode(row, operation="get")

    def create_product(self, product: Product) -> Product:
        if product.created_on is None:
            raise DataAccessError("created_on is required to create a product")

        price = normalize_price(product.price)
        with _data_access("create"):
            row = self.db.execute_returning(
                self._create_query,
                {
                    "name": product.name,
                    "price": price,
                    "created_on": to_storage_timestamp(product.created_on),
                },
            )
        if row is None:
            raise DataAccessError("insert did not return a product id")
        return replace(
            product,
            id=int(row["id"]),
            price=price,
            created_on=from_storage_timestamp(product.created_on),
        )

    def update_product(self, product: Product) -> Product | None:
        """Update name and price of `product.id`.

        Returns the stored row, or None when no row matched. A missing row is
        not an error here; callers decide what it means.
        """

        with _data_access("update"):
            row = self.db.execute_returning(
                self._update_query,
                {
                    "id": product.id,
                    "name": product.name,
                    "price": normalize_price(product.price),
                },
            )
        if row is None:
            return None
        return self._decode(row, operation="update")

    def delete_product(self, product_id: int) -> None:
        with _data_access("delete"):
            self.db.execute(self._delete_query, {"id": product_id})

    @staticmethod
    def _decode(row: dict[str, Any], *, operation: str) -> Product:
        try:
            created_on = row["created_on"]
            if isinstance(created_on, str):
                created_on = datetime.fromisoformat(created_on)
            return Product(
                id=int(row["id"]),
                name=str(row["name"]),
                price=normalize_price(row["price"]),
                created_on=from_storage_timestamp(created_on),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            LOGGER.warning("product %s returned an undecodable row: %s", operation, exc)
            raise DataAccessError(f"could not decode product row: {exc}") from exc
