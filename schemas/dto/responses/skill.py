"""
Response DTOs for skill endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from schemas.models.skill import SkillCategoryDoc


class SkillResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    level: int


class SkillCategoryResponse(BaseModel):
    """Public shape of a skill category with its embedded skills."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    category: str
    slug: str
    skills: list[SkillResponse]

    @classmethod
    def from_doc(cls, doc: SkillCategoryDoc) -> "SkillCategoryResponse":
        return cls(
            id=str(doc.id),
            category=doc.category,
            slug=doc.slug,
            skills=[SkillResponse(name=s.name, level=s.level) for s in doc.skills],
        )


class CategorySummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    skill_count: int
    average_level: int


class SkillStatsResponse(BaseModel):
    """Response body for GET /api/skills/stats."""

    model_config = ConfigDict(populate_by_name=True)

    total_categories: int
    total_skills: int
    average_level: int
    categories: list[CategorySummary]
