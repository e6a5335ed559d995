"""
Achievement document model.

Maps to the `achievements` MongoDB collection. Titles are unique,
compared case-insensitively.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel


class AchievementDoc(MongoBaseModel):
    """Document model for the `achievements` collection.

    ``date`` is the day the achievement happened, stored as midnight UTC
    since BSON has no date-only type.
    """

    title: str
    description: str
    category: str
    date: datetime
    icon: str = "star"
    featured: bool = False
    order: int = Field(default=1, ge=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
