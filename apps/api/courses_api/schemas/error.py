"""API error response schemas."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    message: str
    error: dict[str, Any] = Field(default_factory=dict)
    errors: list[str] | None = None


class RouteNotFoundError(BaseModel):
    message: str
