# This file defines the product CRUD endpoints.
# Each handler extracts and validates its inputs, makes the store call(s) and shapes the response;
# none of them builds SQL. Store errors propagate to the registered error handlers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from product_api.api.api_config import ApiConfig
from product_api.api.dependencies import get_config, get_product_store
from product_api.api.pagination import normalize_list_window
from product_api.api.schemas.common import DeleteResponse, ErrorResponse
from product_api.api.schemas.product_schemas import (
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from product_api.api.services.product_store import ProductStore

router = APIRouter(tags=["products"])
StoreDep = Annotated[ProductStore, Depends(get_product_store)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/products", response_model=list[ProductResponse], responses={500: {"model": ErrorResponse}})
def list_products(
    store: StoreDep,
    config: ConfigDep,
    count: str | None = Query(
        default=None,
        description=(
            "Maximum number of products to return. Invalid or non-positive values use the "
            "configured default; values above the configured maximum are capped to it."
        ),
    ),
    start: str | None = Query(
        default=None,
        description="Number of products to skip. Invalid or negative values start from 0.",
    ),
) -> list[ProductResponse]:
    window = normalize_list_window(
        count=count,
        start=start,
        default_count=config.default_list_count,
        max_count=config.max_list_count,
    )
    products = store.list_products(start=window.start, count=window.count)
    return [ProductResponse.from_product(product) for product in products]


@router.get("/product/{product_id}", response_model=ProductResponse, responses=ERROR_RESPONSES)
def get_product(product_id: int, store: StoreDep) -> ProductResponse:
    return ProductResponse.from_product(store.get_product(product_id))


@router.post(
    "/product",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def create_product(payload: ProductCreateRequest, store: StoreDep) -> ProductResponse:
    return ProductResponse.from_product(store.create_product(payload.to_product()))


@router.put("/product/{product_id}", response_model=ProductResponse, responses=ERROR_RESPONSES)
def update_product(
    product_id: int,
    payload: ProductUpdateRequest,
    store: StoreDep,
) -> ProductResponse:
    submitted = payload.to_product(product_id)
    updated = store.update_product(submitted)
    # Zero rows matched: respond with the submitted values, created_on unknown.
    return ProductResponse.from_product(updated if updated is not None else submitted)


@router.delete("/product/{product_id}", response_model=DeleteResponse, responses=ERROR_RESPONSES)
def delete_product(product_id: int, store: StoreDep) -> DeleteResponse:
    store.delete_product(product_id)
    return DeleteResponse()
