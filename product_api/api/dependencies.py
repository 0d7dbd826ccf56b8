# This file provides dependency factories for FastAPI routes.
# The config, database client and product store are built once by `create_app` and kept on
# application state; these factories only hand the shared instances to handlers, which keeps
# endpoint tests easy to override.

from __future__ import annotations

from fastapi import Request

from product_api.api.api_config import ApiConfig
from product_api.api.db_access import DatabaseClient
from product_api.api.services.product_store import ProductStore


def get_config(request: Request) -> ApiConfig:
    return request.app.state.config


def get_database_client(request: Request) -> DatabaseClient:
    return request.app.state.db


def get_product_store(request: Request) -> ProductStore:
    return request.app.state.product_store
