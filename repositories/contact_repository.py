"""Repository for the `contacts` collection."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument

from repositories.base import BaseRepository
from schemas.models.contact import CONTACT_STATUSES, ContactDoc


class ContactRepository(BaseRepository):
    collection_name = "contacts"

    async def insert(self, contact: ContactDoc) -> ContactDoc:
        result = await self._col.insert_one(contact.to_mongo())
        return contact.model_copy(update={"id": result.inserted_id})

    async def find_by_id(self, contact_id: ObjectId) -> Optional[ContactDoc]:
        return ContactDoc.from_mongo(await self._col.find_one({"_id": contact_id}))

    async def find_page(
        self, query: dict[str, Any], *, skip: int, limit: int
    ) -> list[ContactDoc]:
        cursor = (
            self._col.find(query).sort("created_at", DESCENDING).skip(skip).limit(limit)
        )
        return [ContactDoc.from_mongo(d) for d in await cursor.to_list(length=limit)]

    async def count(self, query: Optional[dict[str, Any]] = None) -> int:
        return await self._col.count_documents(query or {})

    async def mark_read(self, contact_id: ObjectId, now: datetime) -> Optional[ContactDoc]:
        """Move an unread message to read; other statuses are left alone."""
        doc = await self._col.find_one_and_update(
            {"_id": contact_id, "status": "unread"},
            {"$set": {"status": "read", "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return ContactDoc.from_mongo(doc)

    async def update_status(
        self, contact_id: ObjectId, status: str, now: datetime
    ) -> Optional[ContactDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": contact_id},
            {"$set": {"status": status, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return ContactDoc.from_mongo(doc)

    async def bulk_update_status(
        self, contact_ids: list[ObjectId], status: str, now: datetime
    ) -> int:
        result = await self._col.update_many(
            {"_id": {"$in": contact_ids}},
            {"$set": {"status": status, "updated_at": now}},
        )
        return result.modified_count

    async def delete(self, contact_id: ObjectId) -> bool:
        result = await self._col.delete_one({"_id": contact_id})
        return result.deleted_count > 0

    async def count_by_status(self) -> dict[str, int]:
        """Counts per status; statuses with no messages report 0."""
        counts = {status: 0 for status in CONTACT_STATUSES}
        cursor = await self._col.aggregate(
            [{"$group": {"_id": "$status", "count": {"$sum": 1}}}]
        )
        async for row in cursor:
            counts[row["_id"]] = row["count"]
        return counts
