"""Repository for the `projects` collection."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from repositories.base import BaseRepository
from schemas.models.project import ProjectDoc

# order ascending, then newest first
_LIST_SORT = [("order", ASCENDING), ("created_at", DESCENDING)]


class ProjectRepository(BaseRepository):
    collection_name = "projects"

    async def insert(self, project: ProjectDoc) -> ProjectDoc:
        result = await self._col.insert_one(project.to_mongo())
        return project.model_copy(update={"id": result.inserted_id})

    async def find_by_id(self, project_id: ObjectId) -> Optional[ProjectDoc]:
        return ProjectDoc.from_mongo(await self._col.find_one({"_id": project_id}))

    async def find_many(
        self,
        query: dict[str, Any],
        *,
        skip: int = 0,
        limit: int = 0,
    ) -> list[ProjectDoc]:
        cursor = self._col.find(query).sort(_LIST_SORT).skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [ProjectDoc.from_mongo(d) for d in await cursor.to_list(length=None)]

    async def count(self, query: Optional[dict[str, Any]] = None) -> int:
        return await self._col.count_documents(query or {})

    async def update_fields(
        self, project_id: ObjectId, fields: dict[str, Any], now: datetime
    ) -> Optional[ProjectDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": project_id},
            {"$set": {**fields, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return ProjectDoc.from_mongo(doc)

    async def delete(self, project_id: ObjectId) -> Optional[ProjectDoc]:
        """Delete and return the removed document so its image can be cleaned up."""
        return ProjectDoc.from_mongo(
            await self._col.find_one_and_delete({"_id": project_id})
        )

    async def increment_views(
        self, project_id: ObjectId, query: Optional[dict[str, Any]] = None
    ) -> Optional[ProjectDoc]:
        doc = await self._col.find_one_and_update(
            {**(query or {}), "_id": project_id},
            {"$inc": {"views": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return ProjectDoc.from_mongo(doc)

    async def increment_likes(self, project_id: ObjectId) -> Optional[ProjectDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": project_id},
            {"$inc": {"likes": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return ProjectDoc.from_mongo(doc)

    async def toggle_featured(
        self, project_id: ObjectId, now: datetime
    ) -> Optional[ProjectDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": project_id},
            [{"$set": {"featured": {"$not": ["$featured"]}, "updated_at": now}}],
            return_document=ReturnDocument.AFTER,
        )
        return ProjectDoc.from_mongo(doc)

    async def stats_by_category(self) -> dict[str, dict[str, int]]:
        cursor = await self._col.aggregate(
            [
                {
                    "$group": {
                        "_id": "$category",
                        "count": {"$sum": 1},
                        "views": {"$sum": "$views"},
                        "likes": {"$sum": "$likes"},
                    }
                }
            ]
        )
        stats: dict[str, dict[str, int]] = {}
        async for row in cursor:
            stats[row["_id"]] = {
                "count": row["count"],
                "views": row["views"],
                "likes": row["likes"],
            }
        return stats
