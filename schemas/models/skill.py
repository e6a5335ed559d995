"""
Skill category document model.

Maps to the `skill-categories` MongoDB collection. Skills are embedded in
their category; names are unique per category, compared case-insensitively.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from schemas.models.base import MongoBaseModel


class SkillEntry(BaseModel):
    """Single embedded skill."""

    name: str
    level: int = Field(ge=0, le=100)


class SkillCategoryDoc(MongoBaseModel):
    """Document model for the `skill-categories` collection."""

    category: str
    # lower-cased category with whitespace → "-", used in public URLs
    slug: str
    skills: list[SkillEntry] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
