"""
Achievements: public listing and admin management.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pymongo.errors import DuplicateKeyError

from errors import ConflictError, NotFoundError
from repositories.achievement_repository import AchievementRepository
from repositories.base import as_object_id
from schemas.dto.requests.achievement import (
    CreateAchievementRequest,
    ListAchievementsQuery,
    UpdateAchievementRequest,
)
from schemas.models.achievement import AchievementDoc
from shared.datetime_utils import utcnow
from shared.logging import get_logger
from shared.validators import exact_ci_regex

log = get_logger(__name__)

RECENT_LIMIT = 5


def _as_datetime(day: dt.date) -> dt.datetime:
    """Midnight UTC of *day*; BSON has no date-only type."""
    return dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc)


class AchievementService:
    def __init__(self, achievement_repo: AchievementRepository) -> None:
        self._achievements = achievement_repo

    async def list_achievements(self, query: ListAchievementsQuery) -> list[AchievementDoc]:
        mongo_query: dict[str, Any] = {}
        if query.featured:
            mongo_query["featured"] = True
        if query.category:
            mongo_query["category"] = exact_ci_regex(query.category)
        return await self._achievements.find_many(mongo_query)

    async def featured(self) -> list[AchievementDoc]:
        return await self._achievements.find_many({"featured": True})

    async def by_category(self, category: str) -> list[AchievementDoc]:
        return await self._achievements.find_many({"category": exact_ci_regex(category)})

    async def get(self, achievement_id: str) -> AchievementDoc:
        oid = as_object_id(achievement_id)
        achievement = await self._achievements.find_by_id(oid) if oid else None
        if achievement is None:
            raise NotFoundError("Achievement not found")
        return achievement

    async def create(self, request: CreateAchievementRequest) -> AchievementDoc:
        if await self._achievements.title_taken(request.title):
            raise ConflictError("Achievement with this title already exists", field="title")

        order: Optional[int] = request.order
        if order is None:
            order = await self._achievements.count() + 1

        now = utcnow()
        doc = AchievementDoc(
            title=request.title,
            description=request.description,
            category=request.category,
            date=_as_datetime(request.date),
            icon=request.icon,
            featured=request.featured,
            order=order,
            created_at=now,
            updated_at=now,
        )
        try:
            achievement = await self._achievements.insert(doc)
        except DuplicateKeyError as e:
            raise ConflictError(
                "Achievement with this title already exists", field="title"
            ) from e
        log.info("achievement_created", achievement_id=str(achievement.id))
        return achievement

    async def update(
        self, achievement_id: str, request: UpdateAchievementRequest
    ) -> AchievementDoc:
        achievement = await self.get(achievement_id)
        fields = request.model_dump(exclude_unset=True, exclude_none=True)

        title = fields.get("title")
        if (
            title
            and title.lower() != achievement.title.lower()
            and await self._achievements.title_taken(title, exclude_id=achievement.id)
        ):
            raise ConflictError("Achievement with this title already exists", field="title")
        if "date" in fields:
            fields["date"] = _as_datetime(fields["date"])

        try:
            updated = await self._achievements.update_fields(achievement.id, fields, utcnow())
        except DuplicateKeyError as e:
            raise ConflictError(
                "Achievement with this title already exists", field="title"
            ) from e
        if updated is None:
            raise NotFoundError("Achievement not found")
        log.info("achievement_updated", achievement_id=achievement_id, fields=sorted(fields))
        return updated

    async def delete(self, achievement_id: str) -> None:
        oid = as_object_id(achievement_id)
        if oid is None or not await self._achievements.delete(oid):
            raise NotFoundError("Achievement not found")
        log.info("achievement_deleted", achievement_id=achievement_id)

    async def toggle_featured(self, achievement_id: str) -> AchievementDoc:
        oid = as_object_id(achievement_id)
        achievement = (
            await self._achievements.toggle_featured(oid, utcnow()) if oid else None
        )
        if achievement is None:
            raise NotFoundError("Achievement not found")
        return achievement

    async def stats(self) -> dict[str, Any]:
        return {
            "total_achievements": await self._achievements.count(),
            "featured_count": await self._achievements.count({"featured": True}),
            "categories": await self._achievements.count_by_category(),
            "recent_achievements": await self._achievements.find_recent(RECENT_LIMIT),
        }
