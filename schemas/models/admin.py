"""
Admin account document model.

Maps to the `admins` MongoDB collection.

password_hash is argon2 and is never serialised into API responses.
password_reset_token stores SHA-256(raw token); the emailed value is never
stored. login_attempts / lock_until drive the lockout state machine in
shared/lockout.py.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super-admin"

AdminRole = Literal["admin", "super-admin"]


class AdminDoc(MongoBaseModel):
    """Document model for the `admins` collection."""

    name: str
    email: str
    password_hash: str
    role: AdminRole = ROLE_ADMIN
    avatar: Optional[str] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    login_attempts: int = Field(default=0, ge=0)
    lock_until: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None
    password_reset_token: Optional[str] = None
    password_reset_expires: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
