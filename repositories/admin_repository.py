"""
Repository for the `admins` collection.

All lockout and reset-token mutations are single atomic operations so that
concurrent requests against the same account never lose an update.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from repositories.base import BaseRepository
from schemas.models.admin import ROLE_ADMIN, ROLE_SUPER_ADMIN, AdminDoc


def _lock_is_set() -> dict:
    return {"$ne": [{"$ifNull": ["$lock_until", None]}, None]}


def build_failed_login_pipeline(
    now: datetime, max_attempts: int, lock_duration: timedelta
) -> list[dict]:
    """Aggregation-pipeline update applying one failed login at *now*.

    Mirrors shared.lockout.next_failure_state:
    - an expired lock is cleared and the counter restarts at 1;
    - otherwise the counter is incremented;
    - reaching *max_attempts* while not locked sets lock_until.
    """
    return [
        {
            "$set": {
                "_lock_expired": {
                    "$and": [_lock_is_set(), {"$lte": ["$lock_until", now]}]
                },
                "_was_locked": {
                    "$and": [_lock_is_set(), {"$gt": ["$lock_until", now]}]
                },
            }
        },
        {
            "$set": {
                "login_attempts": {
                    "$cond": [
                        "$_lock_expired",
                        1,
                        {"$add": [{"$ifNull": ["$login_attempts", 0]}, 1]},
                    ]
                },
                "lock_until": {
                    "$cond": ["$_lock_expired", None, {"$ifNull": ["$lock_until", None]}]
                },
            }
        },
        {
            "$set": {
                "lock_until": {
                    "$cond": [
                        {
                            "$and": [
                                {"$gte": ["$login_attempts", max_attempts]},
                                {"$not": ["$_was_locked"]},
                            ]
                        },
                        now + lock_duration,
                        "$lock_until",
                    ]
                },
                "updated_at": now,
            }
        },
        {"$unset": ["_lock_expired", "_was_locked"]},
    ]


class AdminRepository(BaseRepository):
    collection_name = "admins"

    async def find_by_id(self, admin_id: ObjectId) -> Optional[AdminDoc]:
        return AdminDoc.from_mongo(await self._col.find_one({"_id": admin_id}))

    async def find_by_email(self, email: str) -> Optional[AdminDoc]:
        return AdminDoc.from_mongo(await self._col.find_one({"email": email}))

    async def email_taken(
        self, email: str, exclude_id: Optional[ObjectId] = None
    ) -> bool:
        query: dict[str, Any] = {"email": email}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return await self._col.count_documents(query, limit=1) > 0

    async def list_all(self) -> list[AdminDoc]:
        cursor = self._col.find({}).sort("created_at", 1)
        return [AdminDoc.from_mongo(d) for d in await cursor.to_list(length=None)]

    async def insert(self, admin: AdminDoc) -> AdminDoc:
        result = await self._col.insert_one(admin.to_mongo())
        return admin.model_copy(update={"id": result.inserted_id})

    async def update_fields(
        self, admin_id: ObjectId, fields: dict[str, Any], now: datetime
    ) -> Optional[AdminDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": admin_id},
            {"$set": {**fields, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )
        return AdminDoc.from_mongo(doc)

    async def delete(self, admin_id: ObjectId) -> bool:
        result = await self._col.delete_one({"_id": admin_id})
        return result.deleted_count > 0

    async def register_failed_login(
        self,
        admin_id: ObjectId,
        now: datetime,
        *,
        max_attempts: int,
        lock_duration: timedelta,
    ) -> Optional[AdminDoc]:
        """Atomically count one failed login; returns the post-update document."""
        doc = await self._col.find_one_and_update(
            {"_id": admin_id},
            build_failed_login_pipeline(now, max_attempts, lock_duration),
            return_document=ReturnDocument.AFTER,
        )
        return AdminDoc.from_mongo(doc)

    async def register_successful_login(
        self, admin_id: ObjectId, now: datetime
    ) -> Optional[AdminDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": admin_id},
            {
                "$set": {"login_attempts": 0, "last_login": now, "updated_at": now},
                "$unset": {"lock_until": ""},
            },
            return_document=ReturnDocument.AFTER,
        )
        return AdminDoc.from_mongo(doc)

    async def set_password_hash(
        self, admin_id: ObjectId, password_hash: str, changed_at: datetime
    ) -> bool:
        result = await self._col.update_one(
            {"_id": admin_id},
            {
                "$set": {
                    "password_hash": password_hash,
                    "password_changed_at": changed_at,
                    "updated_at": changed_at,
                }
            },
        )
        return result.matched_count > 0

    async def set_reset_token(
        self, admin_id: ObjectId, token_digest: str, expires_at: datetime
    ) -> None:
        await self._col.update_one(
            {"_id": admin_id},
            {
                "$set": {
                    "password_reset_token": token_digest,
                    "password_reset_expires": expires_at,
                }
            },
        )

    async def clear_reset_token(self, admin_id: ObjectId) -> None:
        await self._col.update_one(
            {"_id": admin_id},
            {"$unset": {"password_reset_token": "", "password_reset_expires": ""}},
        )

    async def consume_reset_token(
        self,
        token_digest: str,
        now: datetime,
        password_hash: str,
        changed_at: datetime,
    ) -> Optional[AdminDoc]:
        """Swap in *password_hash* for the account holding a live reset token.

        Matching and clearing happen in one operation, so a token can be
        used at most once even under concurrent requests.
        """
        doc = await self._col.find_one_and_update(
            {
                "password_reset_token": token_digest,
                "password_reset_expires": {"$gt": now},
            },
            {
                "$set": {
                    "password_hash": password_hash,
                    "password_changed_at": changed_at,
                    "updated_at": now,
                },
                "$unset": {"password_reset_token": "", "password_reset_expires": ""},
            },
            return_document=ReturnDocument.AFTER,
        )
        return AdminDoc.from_mongo(doc)

    async def stats(self) -> dict[str, int]:
        return {
            "total": await self._col.count_documents({}),
            "active": await self._col.count_documents({"is_active": True}),
            "super_admins": await self._col.count_documents({"role": ROLE_SUPER_ADMIN}),
            "admins": await self._col.count_documents({"role": ROLE_ADMIN}),
        }
