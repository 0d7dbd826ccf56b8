# This file defines the API error taxonomy and the exception handlers that render it.
# It exists so every endpoint returns the same `{"error": ...}` body for a given failure class.
# Validation failures become 400s with generic messages, missing products 404s and storage failures 500s.
# Unexpected exceptions are logged with their traceback and never echoed to clients.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

LOGGER = logging.getLogger("product_api.errors")

INVALID_PRODUCT_ID = "Invalid product ID"
INVALID_PAYLOAD = "Invalid request payload"
INVALID_PARAMETERS = "Invalid request parameters"
PRODUCT_NOT_FOUND = "Product not found"


class APIError(Exception):
    """Domain error type carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        super().__init__(message)


class ValidationError(APIError):
    """Malformed path, query or body input."""

    status_code = 400


class NotFoundError(APIError):
    """The requested product does not exist."""

    status_code = 404

    def __init__(self, message: str = PRODUCT_NOT_FOUND) -> None:
        super().__init__(message)


class DataAccessError(APIError):
    """Any failure reported by the storage backend."""

    status_code = 500


def _error_body(message: str) -> dict[str, Any]:
    return {"error": message}


def _validation_message(exc: RequestValidationError) -> str:
    locations = {str(error.get("loc", ("",))[0]) for error in exc.errors()}
    if "path" in locations:
        return INVALID_PRODUCT_ID
    if "body" in locations:
        return INVALID_PAYLOAD
    return INVALID_PARAMETERS


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        if exc.status_code >= 500:
            LOGGER.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=_error_body(_validation_message(exc)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.error(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))
