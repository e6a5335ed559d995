"""
Skill categories and the skills embedded in them.
"""

from __future__ import annotations

from typing import Any

from pymongo.errors import DuplicateKeyError

from errors import ConflictError, NotFoundError
from repositories.base import as_object_id
from repositories.skill_repository import SkillRepository
from schemas.dto.requests.skill import (
    AddSkillRequest,
    CreateSkillCategoryRequest,
    UpdateSkillRequest,
)
from schemas.models.skill import SkillCategoryDoc, SkillEntry
from shared.datetime_utils import utcnow
from shared.logging import get_logger
from shared.validators import slugify_category

log = get_logger(__name__)


def _find_skill(category: SkillCategoryDoc, name: str):
    lowered = name.lower()
    return next((s for s in category.skills if s.name.lower() == lowered), None)


def _average(levels: list[int]) -> int:
    return round(sum(levels) / len(levels)) if levels else 0


class SkillService:
    def __init__(self, skill_repo: SkillRepository) -> None:
        self._skills = skill_repo

    async def list_categories(self) -> list[SkillCategoryDoc]:
        return await self._skills.list_all()

    async def get_by_slug(self, slug: str) -> SkillCategoryDoc:
        category = await self._skills.find_by_slug(slug.lower())
        if category is None:
            raise NotFoundError("Skill category not found")
        return category

    async def _get(self, category_id: str) -> SkillCategoryDoc:
        oid = as_object_id(category_id)
        category = await self._skills.find_by_id(oid) if oid else None
        if category is None:
            raise NotFoundError("Skill category not found")
        return category

    async def create_category(self, request: CreateSkillCategoryRequest) -> SkillCategoryDoc:
        slug = slugify_category(request.category)
        if await self._skills.category_exists(request.category, slug):
            raise ConflictError("Skill category already exists", field="category")
        now = utcnow()
        try:
            category = await self._skills.insert(
                SkillCategoryDoc(
                    category=request.category, slug=slug, created_at=now, updated_at=now
                )
            )
        except DuplicateKeyError as e:
            raise ConflictError("Skill category already exists", field="category") from e
        log.info("skill_category_created", category_id=str(category.id), slug=slug)
        return category

    async def add_skill(self, category_id: str, request: AddSkillRequest) -> SkillCategoryDoc:
        category = await self._get(category_id)
        skill = SkillEntry(name=request.name, level=request.level)
        updated = await self._skills.push_skill(category.id, skill, utcnow())
        if updated is None:
            raise ConflictError("Skill already exists in this category", field="name")
        log.info("skill_added", category_id=category_id, skill=skill.name)
        return updated

    async def update_skill(
        self, category_id: str, skill_name: str, request: UpdateSkillRequest
    ) -> SkillCategoryDoc:
        category = await self._get(category_id)
        current = _find_skill(category, skill_name)
        if current is None:
            raise NotFoundError("Skill not found")

        new_name = request.name if request.name is not None else current.name
        if new_name.lower() != current.name.lower() and _find_skill(category, new_name):
            raise ConflictError("Skill already exists in this category", field="name")

        replacement = SkillEntry(
            name=new_name,
            level=request.level if request.level is not None else current.level,
        )
        updated = await self._skills.set_skill(category.id, current.name, replacement, utcnow())
        if updated is None:
            raise NotFoundError("Skill not found")
        log.info("skill_updated", category_id=category_id, skill=replacement.name)
        return updated

    async def delete_skill(self, category_id: str, skill_name: str) -> SkillEntry:
        category = await self._get(category_id)
        current = _find_skill(category, skill_name)
        if current is None:
            raise NotFoundError("Skill not found")
        if await self._skills.pull_skill(category.id, current.name, utcnow()) is None:
            raise NotFoundError("Skill not found")
        log.info("skill_deleted", category_id=category_id, skill=current.name)
        return current

    async def delete_category(self, category_id: str) -> None:
        oid = as_object_id(category_id)
        if oid is None or not await self._skills.delete(oid):
            raise NotFoundError("Skill category not found")
        log.info("skill_category_deleted", category_id=category_id)

    async def stats(self) -> dict[str, Any]:
        categories = await self._skills.list_all()
        levels = [s.level for c in categories for s in c.skills]
        return {
            "total_categories": len(categories),
            "total_skills": len(levels),
            "average_level": _average(levels),
            "categories": [
                {
                    "name": c.category,
                    "skill_count": len(c.skills),
                    "average_level": _average([s.level for s in c.skills]),
                }
                for c in categories
            ],
        }
