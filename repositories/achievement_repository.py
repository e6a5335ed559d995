"""Repository for the `achievements` collection."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from repositories.base import BaseRepository
from schemas.models.achievement import AchievementDoc
from shared.validators import exact_ci_regex

_LIST_SORT = [("order", ASCENDING), ("date", DESCENDING)]


class AchievementRepository(BaseRepository):
    collection_name = "achievements"

    async def find_many(
        self, query: Optional[dict[str, Any]] = None
    ) -> list[AchievementDoc]:
        cursor = self._col.find(query or {}).sort(_LIST_SORT)
        return [AchievementDoc.from_mongo(d) for d in await cursor.to_list(length=None)]

    async def find_recent(self, limit: int = 5) -> list[AchievementDoc]:
        cursor = self._col.find({}).sort("date", DESCENDING).limit(limit)
        return [AchievementDoc.from_mongo(d) for d in await cursor.to_list(length=limit)]

    async def find_by_id(self, achievement_id: ObjectId) -> Optional[AchievementDoc]:
        return AchievementDoc.from_mongo(
            await self._col.find_one({"_id": achievement_id})
        )

    async def title_taken(
        self, title: str, exclude_id: Optional[ObjectId] = None
    ) -> bool:
        query: dict[str, Any] = {"title": exact_ci_regex(title)}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return await self._col.count_documents(query, limit=1) > 0

    async def insert(self, achievement: AchievementDoc) -> AchievementDoc:
        result = await self._col.insert_one(achievement.to_mongo())
        return achievement.model_copy(update={"id": result.inserted_id})

    async def insert_many(self, achievements: list[AchievementDoc]) -> int:
        result = await self._col.insert_many([a.to_mongo() for a in achievements])
        return len(result.inserted_ids)

    async def update_fields(
        self, achievement_id: ObjectId, fields: dict[str, Any], now: datetime
    ) -> Optional[AchievementDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": achievement_id},
            {"$set": {**fields, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return AchievementDoc.from_mongo(doc)

    async def delete(self, achievement_id: ObjectId) -> bool:
        result = await self._col.delete_one({"_id": achievement_id})
        return result.deleted_count > 0

    async def toggle_featured(
        self, achievement_id: ObjectId, now: datetime
    ) -> Optional[AchievementDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": achievement_id},
            [{"$set": {"featured": {"$not": ["$featured"]}, "updated_at": now}}],
            return_document=ReturnDocument.AFTER,
        )
        return AchievementDoc.from_mongo(doc)

    async def count(self, query: Optional[dict[str, Any]] = None) -> int:
        return await self._col.count_documents(query or {})

    async def count_by_category(self) -> list[dict[str, Any]]:
        cursor = await self._col.aggregate(
            [
                {"$group": {"_id": "$category", "count": {"$sum": 1}}},
                {"$sort": {"count": -1, "_id": 1}},
            ]
        )
        return [{"name": row["_id"], "count": row["count"]} async for row in cursor]
