"""
Request DTOs for skill endpoints.

CreateSkillCategoryRequest — POST /api/skills/category
AddSkillRequest            — POST /api/skills/category/{id}
UpdateSkillRequest         — PUT  /api/skills/category/{id}/skill/{name}
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateSkillCategoryRequest(BaseModel):
    """Request body for POST /api/skills/category."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    category: str = Field(min_length=3, max_length=50)


class AddSkillRequest(BaseModel):
    """Request body for POST /api/skills/category/{id}."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=30)
    level: int = Field(ge=0, le=100)


class UpdateSkillRequest(BaseModel):
    """Request body for PUT /api/skills/category/{id}/skill/{name}."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=2, max_length=30)
    level: Optional[int] = Field(default=None, ge=0, le=100)
