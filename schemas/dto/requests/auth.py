"""
Request DTOs for admin authentication and account endpoints.

LoginRequest           — POST /api/admin/login
ForgotPasswordRequest  — POST /api/admin/forgot-password
ResetPasswordRequest   — PUT  /api/admin/reset-password/{token}
ChangePasswordRequest  — PUT  /api/admin/change-password
UpdateProfileRequest   — PUT  /api/admin/profile
CreateAdminRequest     — POST /api/admin
UpdateAdminRequest     — PUT  /api/admin/{id}
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from schemas.models.admin import AdminRole

MIN_PASSWORD_LENGTH = 6


class LoginRequest(BaseModel):
    """Request body for POST /api/admin/login."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class ForgotPasswordRequest(BaseModel):
    """Request body for POST /api/admin/forgot-password."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Request body for PUT /api/admin/reset-password/{token}.

    The raw reset token travels in the path, not the body.
    """

    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class ChangePasswordRequest(BaseModel):
    """Request body for PUT /api/admin/change-password."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(
        min_length=MIN_PASSWORD_LENGTH, alias="currentPassword"
    )
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH, alias="newPassword")


class UpdateProfileRequest(BaseModel):
    """Request body for PUT /api/admin/profile. Only provided fields change."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None


class CreateAdminRequest(BaseModel):
    """Request body for POST /api/admin (super-admin only)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    role: AdminRole = "admin"


class UpdateAdminRequest(BaseModel):
    """Request body for PUT /api/admin/{id} (super-admin only).

    Passwords are deliberately not updatable here; they only change through
    change-password or reset-password.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    role: Optional[AdminRole] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    avatar: Optional[str] = None
