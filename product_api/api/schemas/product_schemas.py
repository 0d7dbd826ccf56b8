# This file defines the request and response contracts for product endpoints.
# It exists so request bodies are decoded into explicit types instead of loose dictionaries.
# Prices stay Decimal in Python and are written as JSON numbers; timestamps are RFC 3339 in UTC.

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_serializer, field_validator

from product_api.api.services.product_store import MAX_PRICE, Product, normalize_price

JsonPrice = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _storable_price(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("price must be a finite number")
    price = normalize_price(value)
    if abs(price) > MAX_PRICE:
        raise ValueError(f"price must be between -{MAX_PRICE} and {MAX_PRICE}")
    return price


class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    price: Decimal
    created_on: datetime

    @field_validator("price")
    @classmethod
    def quantize_price(cls, value: Decimal) -> Decimal:
        return _storable_price(value)

    def to_product(self) -> Product:
        return Product(name=self.name, price=self.price, created_on=self.created_on)


class ProductUpdateRequest(BaseModel):
    """Only name and price are writable; any `id` or `created_on` in the body is ignored."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    price: Decimal

    @field_validator("price")
    @classmethod
    def quantize_price(cls, value: Decimal) -> Decimal:
        return _storable_price(value)

    def to_product(self, product_id: int) -> Product:
        return Product(id=product_id, name=self.name, price=self.price)


class ProductResponse(BaseModel):
    id: int
    name: str
    price: JsonPrice
    created_on: datetime | None

    @field_serializer("created_on")
    def serialize_created_on(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        utc_value = value.astimezone(UTC) if value.tzinfo else value.replace(tzinfo=UTC)
        return utc_value.isoformat().replace("+00:00", "Z")

    @classmethod
    def from_product(cls, product: Product) -> ProductResponse:
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            created_on=product.created_on,
        )
