"""
Request DTOs for project endpoints.

CreateProjectRequest — POST /api/projects
UpdateProjectRequest — PUT  /api/projects/{id}
ListProjectsQuery    — GET  /api/projects

Images are uploaded separately (POST /api/projects/{id}/image).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from schemas.models.project import ProjectCategory, ProjectStatus
from shared.validators import validate_http_url

_URL_FIELDS = ("live_url", "github_url", "demo_url")


def _check_url(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    if not validate_http_url(v):
        raise ValueError("must be a valid http(s) URL")
    return v


def _check_features(v: Optional[list[str]]) -> Optional[list[str]]:
    if v is None:
        return v
    cleaned = [f.strip() for f in v if f and f.strip()]
    for feature in cleaned:
        if len(feature) > 200:
            raise ValueError("feature descriptions cannot exceed 200 characters")
    return cleaned


def _check_technologies(v: Optional[list[str]]) -> Optional[list[str]]:
    if v is None:
        return v
    return [t.strip() for t in v if t and t.strip()]


class CreateProjectRequest(BaseModel):
    """Request body for POST /api/projects."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=20, max_length=1000)
    short_description: Optional[str] = Field(
        default=None, max_length=200, alias="shortDescription"
    )
    category: ProjectCategory
    technologies: list[str] = Field(min_length=1)
    live_url: Optional[str] = Field(default=None, alias="liveUrl")
    github_url: Optional[str] = Field(default=None, alias="githubUrl")
    demo_url: Optional[str] = Field(default=None, alias="demoUrl")
    features: list[str] = []
    challenges: Optional[str] = Field(default=None, max_length=500)
    solutions: Optional[str] = Field(default=None, max_length=500)
    status: ProjectStatus = "draft"
    featured: bool = False
    order: int = 0
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")

    @field_validator(*_URL_FIELDS, mode="after")
    @classmethod
    def _validate_urls(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v)

    @field_validator("features", mode="after")
    @classmethod
    def _validate_features(cls, v: list[str]) -> list[str]:
        return _check_features(v)

    @field_validator("technologies", mode="after")
    @classmethod
    def _validate_technologies(cls, v: list[str]) -> list[str]:
        cleaned = _check_technologies(v)
        if not cleaned:
            raise ValueError("at least one technology is required")
        return cleaned

    @model_validator(mode="after")
    def _check_dates(self) -> "CreateProjectRequest":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate cannot be before startDate")
        return self


class UpdateProjectRequest(BaseModel):
    """Request body for PUT /api/projects/{id}. Only provided fields change."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=5, max_length=100)
    description: Optional[str] = Field(default=None, min_length=20, max_length=1000)
    short_description: Optional[str] = Field(
        default=None, max_length=200, alias="shortDescription"
    )
    category: Optional[ProjectCategory] = None
    technologies: Optional[list[str]] = None
    live_url: Optional[str] = Field(default=None, alias="liveUrl")
    github_url: Optional[str] = Field(default=None, alias="githubUrl")
    demo_url: Optional[str] = Field(default=None, alias="demoUrl")
    features: Optional[list[str]] = None
    challenges: Optional[str] = Field(default=None, max_length=500)
    solutions: Optional[str] = Field(default=None, max_length=500)
    status: Optional[ProjectStatus] = None
    featured: Optional[bool] = None
    order: Optional[int] = None
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")

    @field_validator(*_URL_FIELDS, mode="after")
    @classmethod
    def _validate_urls(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v)

    @field_validator("features", mode="after")
    @classmethod
    def _validate_features(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _check_features(v)

    @field_validator("technologies", mode="after")
    @classmethod
    def _validate_technologies(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        cleaned = _check_technologies(v)
        if not cleaned:
            raise ValueError("at least one technology is required")
        return cleaned


class ListProjectsQuery(BaseModel):
    """Query parameters for GET /api/projects."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    category: Optional[ProjectCategory] = None
    featured: Optional[bool] = None
    search: Optional[str] = None
