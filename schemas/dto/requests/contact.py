"""
Request DTOs for contact-form endpoints.

ContactRequest           — POST /api/contact
ContactStatusRequest     — PUT  /api/contact/{id}/status
BulkContactStatusRequest — PUT  /api/contact/bulk/status
ListContactsQuery        — GET  /api/contact
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from schemas.models.base import PyObjectId
from schemas.models.contact import ContactStatus


class ContactRequest(BaseModel):
    """Request body for POST /api/contact."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    subject: str = Field(min_length=5, max_length=100)
    message: str = Field(min_length=10, max_length=1000)
    phone: Optional[str] = Field(default=None, max_length=20)

    @field_validator("phone", mode="after")
    @classmethod
    def _blank_phone_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ContactStatusRequest(BaseModel):
    """Request body for PUT /api/contact/{id}/status."""

    model_config = ConfigDict(populate_by_name=True)

    status: ContactStatus


class BulkContactStatusRequest(BaseModel):
    """Request body for PUT /api/contact/bulk/status."""

    model_config = ConfigDict(populate_by_name=True)

    ids: list[PyObjectId] = Field(min_length=1)
    status: ContactStatus


class ListContactsQuery(BaseModel):
    """Query parameters for GET /api/contact."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: Optional[ContactStatus] = None
    search: Optional[str] = None
