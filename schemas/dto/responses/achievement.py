"""
Response DTOs for achievement endpoints.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict

from schemas.models.achievement import AchievementDoc


class AchievementResponse(BaseModel):
    """Public shape of an achievement."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    category: str
    date: dt.date
    icon: str
    featured: bool
    order: int

    @classmethod
    def from_doc(cls, doc: AchievementDoc) -> "AchievementResponse":
        return cls(
            id=str(doc.id),
            title=doc.title,
            description=doc.description,
            category=doc.category,
            date=doc.date.date(),
            icon=doc.icon,
            featured=doc.featured,
            order=doc.order,
        )


class AchievementCategoryCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    count: int


class AchievementStatsResponse(BaseModel):
    """Response body for GET /api/achievements/stats."""

    model_config = ConfigDict(populate_by_name=True)

    total_achievements: int
    featured_count: int
    categories: list[AchievementCategoryCount]
    recent_achievements: list[AchievementResponse]
