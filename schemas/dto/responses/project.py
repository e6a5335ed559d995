"""
Response DTOs for project endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.dto.responses.common import PaginationMeta
from schemas.models.project import ProjectDoc


class ProjectResponse(BaseModel):
    """Public shape of a project."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    short_description: Optional[str] = None
    category: str
    technologies: list[str]
    image: Optional[str] = None
    images: list[str]
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    demo_url: Optional[str] = None
    features: list[str]
    challenges: Optional[str] = None
    solutions: Optional[str] = None
    status: str
    featured: bool
    order: int
    views: int
    likes: int
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    duration_days: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: ProjectDoc) -> "ProjectResponse":
        return cls(
            id=str(doc.id),
            duration_days=doc.duration_days,
            **doc.model_dump(exclude={"id"}),
        )


class ProjectListResponse(BaseModel):
    """Response body for GET /api/projects."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[ProjectResponse]
    pagination: PaginationMeta


class CategoryStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    count: int
    views: int
    likes: int


class ProjectStatsResponse(BaseModel):
    """Response body for GET /api/projects/stats."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    published: int
    featured: int
    by_category: dict[str, CategoryStats]


class LikeResponse(BaseModel):
    """Response body for POST /api/projects/{id}/like."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    likes: int
