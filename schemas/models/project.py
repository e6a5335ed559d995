"""
Project document model.

Maps to the `projects` MongoDB collection.

views / likes are only ever changed with $inc so concurrent readers never
lose a count.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel

PROJECT_CATEGORIES = ("web-development", "mobile-app", "ai-ml", "database", "other")
PROJECT_STATUSES = ("draft", "published", "archived")

ProjectCategory = Literal["web-development", "mobile-app", "ai-ml", "database", "other"]
ProjectStatus = Literal["draft", "published", "archived"]


class ProjectDoc(MongoBaseModel):
    """Document model for the `projects` collection."""

    title: str
    description: str
    short_description: Optional[str] = None
    category: ProjectCategory = "web-development"
    technologies: list[str] = []
    image: Optional[str] = None
    images: list[str] = []
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    features: list[str] = []
    challenges: Optional[str] = None
    solutions: Optional[str] = None
    status: ProjectStatus = "draft"
    featured: bool = False
    order: int = 0
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def duration_days(self) -> Optional[int]:
        """Whole days between start and end date (rounded up), if both are set."""
        if self.start_date is None or self.end_date is None:
            return None
        seconds = abs((self.end_date - self.start_date).total_seconds())
        return math.ceil(seconds / 86400)
