"""
Default portfolio content inserted into empty collections on first start.
"""

from __future__ import annotations

from datetime import datetime, timezone

from repositories.achievement_repository import AchievementRepository
from repositories.skill_repository import SkillRepository
from schemas.models.achievement import AchievementDoc
from schemas.models.skill import SkillCategoryDoc, SkillEntry
from shared.datetime_utils import utcnow
from shared.logging import get_logger
from shared.validators import slugify_category

log = get_logger(__name__)

DEFAULT_SKILLS: dict[str, list[tuple[str, int]]] = {
    "Programming Languages": [
        ("HTML", 90),
        ("CSS", 85),
        ("JavaScript", 80),
        ("Java", 75),
        ("Python", 85),
    ],
    "Databases": [("SQL", 80), ("MySQL", 75), ("MongoDB", 70)],
    "Computer Fundamentals": [
        ("Object Oriented Programming", 85),
        ("Operating System", 80),
        ("DBMS", 75),
    ],
    "Development Tools": [("VS Code", 90), ("GitHub", 85), ("Git", 80)],
}

DEFAULT_ACHIEVEMENTS = [
    {
        "title": "Hackathon Runner-up",
        "description": "Secured 2nd rank in college hackathon competition",
        "category": "Competition",
        "date": datetime(2023, 12, 15, tzinfo=timezone.utc),
        "icon": "trophy",
        "featured": True,
        "order": 1,
    },
    {
        "title": "DSA Excellence",
        "description": "Achieved 200+ problems solved on Geeks for Geeks",
        "category": "Programming",
        "date": datetime(2023, 11, 20, tzinfo=timezone.utc),
        "icon": "medal",
        "featured": True,
        "order": 2,
    },
    {
        "title": "College Rank",
        "description": "Consistently ranked among top performers in college",
        "category": "Academic",
        "date": datetime(2023, 10, 10, tzinfo=timezone.utc),
        "icon": "star",
        "featured": False,
        "order": 3,
    },
]


def default_skill_categories() -> list[SkillCategoryDoc]:
    now = utcnow()
    return [
        SkillCategoryDoc(
            category=name,
            slug=slugify_category(name),
            skills=[SkillEntry(name=s, level=level) for s, level in skills],
            created_at=now,
            updated_at=now,
        )
        for name, skills in DEFAULT_SKILLS.items()
    ]


def default_achievements() -> list[AchievementDoc]:
    now = utcnow()
    return [
        AchievementDoc(**data, created_at=now, updated_at=now)
        for data in DEFAULT_ACHIEVEMENTS
    ]


async def seed_default_content(
    skills: SkillRepository, achievements: AchievementRepository
) -> None:
    """Insert the default skills and achievements into empty collections."""
    if await skills.count() == 0:
        inserted = await skills.insert_many(default_skill_categories())
        log.info("seeded_skill_categories", count=inserted)
    if await achievements.count() == 0:
        inserted = await achievements.insert_many(default_achievements())
        log.info("seeded_achievements", count=inserted)
