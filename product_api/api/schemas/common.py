# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so error and acknowledgement payloads keep one shape across routes.

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


class DeleteResponse(BaseModel):
    result: str = "success"
