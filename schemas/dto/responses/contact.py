"""
Response DTOs for contact-form endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.dto.responses.common import PaginationMeta
from schemas.models.contact import ContactDoc


class ContactCreatedResponse(BaseModel):
    """Response body for POST /api/contact (201)."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    id: str
    name: str
    email: str
    subject: str
    created_at: Optional[datetime] = None


class ContactResponse(BaseModel):
    """Full contact message as seen by admins."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    subject: str
    message: str
    phone: Optional[str] = None
    status: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: ContactDoc) -> "ContactResponse":
        return cls(id=str(doc.id), **doc.model_dump(exclude={"id"}))


class ContactListResponse(BaseModel):
    """Response body for GET /api/contact."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[ContactResponse]
    pagination: PaginationMeta


class ContactStatsResponse(BaseModel):
    """Response body for GET /api/contact/stats."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    today: int
    by_status: dict[str, int]


class BulkStatusResponse(BaseModel):
    """Response body for PUT /api/contact/bulk/status."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    modified_count: int
