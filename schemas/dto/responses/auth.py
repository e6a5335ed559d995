"""
Response DTOs for admin authentication and account endpoints.

AdminProfileResponse — public shape of an admin (never includes secrets)
LoginResponse        — POST /api/admin/login (200)
AdminStatsResponse   — GET  /api/admin/stats (200)
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.admin import AdminDoc


class AdminProfileResponse(BaseModel):
    """Admin profile shape used by login, profile and management endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, admin: AdminDoc) -> "AdminProfileResponse":
        return cls(
            id=str(admin.id),
            name=admin.name,
            email=admin.email,
            role=admin.role,
            avatar=admin.avatar,
            is_active=admin.is_active,
            last_login=admin.last_login,
            created_at=admin.created_at,
        )


class LoginResponse(BaseModel):
    """Response body for POST /api/admin/login (200)."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    admin: AdminProfileResponse


class AdminStatsResponse(BaseModel):
    """Response body for GET /api/admin/stats (200)."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    active: int
    super_admins: int
    admins: int
