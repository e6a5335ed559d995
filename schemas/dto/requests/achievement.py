"""
Request DTOs for achievement endpoints.

CreateAchievementRequest — POST /api/achievements
UpdateAchievementRequest — PUT  /api/achievements/{id}
ListAchievementsQuery    — GET  /api/achievements
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateAchievementRequest(BaseModel):
    """Request body for POST /api/achievements.

    ``order`` defaults to the end of the list when omitted.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=500)
    category: str = Field(min_length=2, max_length=50)
    date: dt.date
    icon: str = Field(default="star", min_length=1, max_length=20)
    featured: bool = False
    order: Optional[int] = Field(default=None, ge=1)


class UpdateAchievementRequest(BaseModel):
    """Request body for PUT /api/achievements/{id}. Only provided fields change."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = Field(default=None, min_length=10, max_length=500)
    category: Optional[str] = Field(default=None, min_length=2, max_length=50)
    date: Optional[dt.date] = None
    icon: Optional[str] = Field(default=None, min_length=1, max_length=20)
    featured: Optional[bool] = None
    order: Optional[int] = Field(default=None, ge=1)


class ListAchievementsQuery(BaseModel):
    """Query parameters for GET /api/achievements."""

    model_config = ConfigDict(populate_by_name=True)

    featured: Optional[bool] = None
    category: Optional[str] = None
