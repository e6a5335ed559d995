"""
Contact message document model.

Maps to the `contacts` MongoDB collection. One document per contact-form
submission; status is moved along by admins.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from schemas.models.base import MongoBaseModel

CONTACT_STATUSES = ("unread", "read", "replied", "archived")

ContactStatus = Literal["unread", "read", "replied", "archived"]


class ContactDoc(MongoBaseModel):
    """Document model for the `contacts` collection."""

    name: str
    email: str
    subject: str
    message: str
    phone: Optional[str] = None
    status: ContactStatus = "unread"
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
