"""
MongoDB index definitions, applied once at startup from the app lifespan.
"""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from shared.logging import get_logger

log = get_logger(__name__)

# strength 2 = case-insensitive comparison
_CASE_INSENSITIVE = {"locale": "en", "strength": 2}


async def ensure_indexes(db: AsyncDatabase) -> None:
    admins = db["admins"]
    await admins.create_index([("email", ASCENDING)], unique=True)
    await admins.create_index([("role", ASCENDING), ("is_active", ASCENDING)])
    await admins.create_index([("password_reset_token", ASCENDING)], sparse=True)

    contacts = db["contacts"]
    await contacts.create_index([("status", ASCENDING), ("created_at", DESCENDING)])
    await contacts.create_index([("email", ASCENDING)])
    await contacts.create_index([("created_at", DESCENDING)])

    projects = db["projects"]
    await projects.create_index(
        [("status", ASCENDING), ("featured", DESCENDING), ("order", ASCENDING)]
    )
    await projects.create_index([("category", ASCENDING), ("status", ASCENDING)])
    await projects.create_index([("technologies", ASCENDING)])

    skills = db["skill-categories"]
    await skills.create_index([("slug", ASCENDING)], unique=True)
    await skills.create_index(
        [("category", ASCENDING)], unique=True, collation=_CASE_INSENSITIVE
    )

    achievements = db["achievements"]
    await achievements.create_index(
        [("title", ASCENDING)], unique=True, collation=_CASE_INSENSITIVE
    )
    await achievements.create_index([("order", ASCENDING), ("date", DESCENDING)])
    await achievements.create_index([("featured", ASCENDING)])

    log.info("mongo_indexes_ensured")
