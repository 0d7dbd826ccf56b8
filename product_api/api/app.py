# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The database client is constructed here once, shared through application state and disposed at shutdown.
# The app adds request IDs, timing headers, Prometheus metrics and optional request logging.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from product_api.api.api_config import ApiConfig, get_api_config
from product_api.api.db_access import DatabaseClient
from product_api.api.error_handlers import register_error_handlers
from product_api.api.routers.health import router as health_router
from product_api.api.routers.products import router as products_router
from product_api.api.services.product_store import ProductStore
from product_api.common.logging import configure_logging

LOGGER = logging.getLogger("product_api.requests")

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)
UNMATCHED_PATH_LABEL = "unmatched"


def _route_path_label(request: Request) -> str:
    """Label requests by route template so `/product/{product_id}` is one series."""

    route = request.scope.get("route")
    return getattr(route, "path_format", None) or UNMATCHED_PATH_LABEL


def create_app(*, config: ApiConfig | None = None, db: DatabaseClient | None = None) -> FastAPI:
    """Create configured FastAPI application instance.

    `config` and `db` default to the environment-driven config and a client
    built from its database URL. The client is disposed when the app shuts down.
    """

    resolved_config = config or get_api_config()
    configure_logging(resolved_config.log_level)
    resolved_db = db or DatabaseClient(database_url=resolved_config.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.db_connected_at_startup = resolved_db.can_connect()
        if not app.state.db_connected_at_startup:
            LOGGER.warning("database is not reachable at startup")
        try:
            yield
        finally:
            resolved_db.close()

    app = FastAPI(
        title=resolved_config.api_name,
        description="CRUD API over the product catalog table.",
        version=resolved_config.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "products", "description": "Create, read, update and delete products."},
        ],
    )
    app.state.config = resolved_config
    app.state.db = resolved_db
    app.state.product_store = ProductStore(config=resolved_config, db=resolved_db)

    if resolved_config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=resolved_config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if resolved_config.enable_request_logging:
                LOGGER.info(
                    "%s %s status=%s duration_ms=%.2f request_id=%s",
                    method_label,
                    request.url.path,
                    status_code,
                    duration_ms,
                    request_id,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_path_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(products_router)

    return app
