"""
Repository for the `skill-categories` collection.

Skills are embedded in their category document; the add/update/remove
operations address a single element of the `skills` array in place.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument

from repositories.base import BaseRepository
from schemas.models.skill import SkillCategoryDoc, SkillEntry
from shared.validators import exact_ci_regex


class SkillRepository(BaseRepository):
    collection_name = "skill-categories"

    async def list_all(self) -> list[SkillCategoryDoc]:
        cursor = self._col.find({}).sort("created_at", ASCENDING)
        return [
            SkillCategoryDoc.from_mongo(d) for d in await cursor.to_list(length=None)
        ]

    async def find_by_id(self, category_id: ObjectId) -> Optional[SkillCategoryDoc]:
        return SkillCategoryDoc.from_mongo(await self._col.find_one({"_id": category_id}))

    async def find_by_slug(self, slug: str) -> Optional[SkillCategoryDoc]:
        return SkillCategoryDoc.from_mongo(await self._col.find_one({"slug": slug}))

    async def category_exists(self, name: str, slug: str) -> bool:
        query = {"$or": [{"category": exact_ci_regex(name)}, {"slug": slug}]}
        return await self._col.count_documents(query, limit=1) > 0

    async def insert(self, category: SkillCategoryDoc) -> SkillCategoryDoc:
        result = await self._col.insert_one(category.to_mongo())
        return category.model_copy(update={"id": result.inserted_id})

    async def insert_many(self, categories: list[SkillCategoryDoc]) -> int:
        result = await self._col.insert_many([c.to_mongo() for c in categories])
        return len(result.inserted_ids)

    async def delete(self, category_id: ObjectId) -> bool:
        result = await self._col.delete_one({"_id": category_id})
        return result.deleted_count > 0

    async def push_skill(
        self, category_id: ObjectId, skill: SkillEntry, now: datetime
    ) -> Optional[SkillCategoryDoc]:
        """Append *skill* unless the category already holds that name.

        Returns ``None`` when the category is missing or the name is taken.
        """
        doc = await self._col.find_one_and_update(
            {
                "_id": category_id,
                "skills": {"$not": {"$elemMatch": {"name": exact_ci_regex(skill.name)}}},
            },
            {"$push": {"skills": skill.model_dump()}, "$set": {"updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return SkillCategoryDoc.from_mongo(doc)

    async def set_skill(
        self,
        category_id: ObjectId,
        current_name: str,
        skill: SkillEntry,
        now: datetime,
    ) -> Optional[SkillCategoryDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": category_id, "skills.name": exact_ci_regex(current_name)},
            {"$set": {"skills.$": skill.model_dump(), "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return SkillCategoryDoc.from_mongo(doc)

    async def pull_skill(
        self, category_id: ObjectId, name: str, now: datetime
    ) -> Optional[SkillCategoryDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": category_id, "skills.name": exact_ci_regex(name)},
            {
                "$pull": {"skills": {"name": exact_ci_regex(name)}},
                "$set": {"updated_at": now},
            },
            return_document=ReturnDocument.AFTER,
        )
        return SkillCategoryDoc.from_mongo(doc)

    async def count(self) -> int:
        return await self._col.count_documents({})
