"""
Shared repository plumbing.

Repositories own every MongoDB call; services never touch collections
directly. Each repository wraps one pymongo AsyncCollection.
"""

from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase


def as_object_id(value: Any) -> Optional[ObjectId]:
    """Return *value* as an ObjectId, or ``None`` if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class BaseRepository:
    collection_name: str = ""

    def __init__(self, db: AsyncDatabase) -> None:
        self._db = db
        self._col: AsyncCollection = db[self.collection_name]

    @property
    def collection(self) -> AsyncCollection:
        return self._col
