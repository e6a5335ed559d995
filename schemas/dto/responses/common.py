"""
Common response DTOs shared across multiple endpoints.

ErrorResponse    — standard error shape from AppError.to_dict()
HealthResponse   — GET /api/health
MessageResponse  — generic {success, message} shape used by many endpoints
PaginationMeta   — pagination block of list responses
ApiInfoResponse  — GET /api
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Standard error JSON body produced by the AppError exception handler."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    code: str
    field: Optional[str] = None
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response body for GET /api/health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    checks: dict[str, str]


class MessageResponse(BaseModel):
    """Generic success/message response returned by several endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None


class PaginationMeta(BaseModel):
    """Reusable pagination metadata included in list responses."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        total_pages = (total + limit - 1) // limit if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class ApiInfoResponse(BaseModel):
    """Response body for GET /api."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    version: str
    endpoints: dict[str, str]
