"""Unit tests for MongoDB document models."""

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError

from schemas.models.achievement import AchievementDoc
from schemas.models.admin import ROLE_ADMIN, AdminDoc
from schemas.models.base import MongoBaseModel, PyObjectId
from schemas.models.contact import ContactDoc
from schemas.models.project import ProjectDoc
from schemas.models.skill import SkillCategoryDoc, SkillEntry


# ── Helpers ───────────────────────────────────────────────────────────────────

def now():
    return datetime.now(timezone.utc)


def oid():
    return ObjectId()


# ── PyObjectId ────────────────────────────────────────────────────────────────

class TestPyObjectId:
    def test_accepts_objectid_instance(self):
        o = oid()
        assert PyObjectId._validate(o) == o

    def test_accepts_valid_string(self):
        s = str(oid())
        result = PyObjectId._validate(s)
        assert isinstance(result, ObjectId)
        assert str(result) == s

    def test_rejects_invalid_string(self):
        with pytest.raises(ValueError):
            PyObjectId._validate("not-an-objectid")


# ── MongoBaseModel ─────────────────────────────────────────────────────────────

class TestMongoBaseModel:
    def test_from_mongo_returns_none_for_none(self):
        assert MongoBaseModel.from_mongo(None) is None

    def test_id_alias(self):
        o = oid()
        assert MongoBaseModel.model_validate({"_id": o}).id == o

    def test_to_mongo_drops_none_id(self):
        assert "_id" not in MongoBaseModel().to_mongo()

    def test_to_mongo_keeps_set_id(self):
        o = oid()
        assert MongoBaseModel.model_validate({"_id": o}).to_mongo()["_id"] == o


# ── AdminDoc ──────────────────────────────────────────────────────────────────

class TestAdminDoc:
    def _raw(self, **overrides):
        base = {
            "_id": oid(),
            "name": "Admin",
            "email": "admin@example.com",
            "password_hash": "$argon2id$...",
        }
        base.update(overrides)
        return base

    def test_defaults(self):
        admin = AdminDoc.from_mongo(self._raw())
        assert admin.role == ROLE_ADMIN
        assert admin.is_active is True
        assert admin.login_attempts == 0
        assert admin.lock_until is None
        assert admin.password_reset_token is None

    def test_missing_lock_fields_tolerated(self):
        raw = self._raw()
        raw.pop("_id")
        admin = AdminDoc.from_mongo(raw)
        assert admin.id is None
        assert admin.login_attempts == 0

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            AdminDoc.from_mongo(self._raw(role="owner"))

    def test_rejects_negative_attempts(self):
        with pytest.raises(ValidationError):
            AdminDoc.from_mongo(self._raw(login_attempts=-1))

    def test_round_trip_keeps_lock(self):
        until = now() + timedelta(hours=2)
        admin = AdminDoc.from_mongo(self._raw(login_attempts=5, lock_until=until))
        d = admin.to_mongo()
        assert d["login_attempts"] == 5
        assert d["lock_until"] == until


# ── ContactDoc ────────────────────────────────────────────────────────────────

class TestContactDoc:
    def test_default_status_unread(self):
        c = ContactDoc(name="Jo", email="jo@example.com", subject="Hello", message="x" * 10)
        assert c.status == "unread"

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            ContactDoc(
                name="Jo",
                email="jo@example.com",
                subject="Hello",
                message="x" * 10,
                status="spam",
            )


# ── ProjectDoc ────────────────────────────────────────────────────────────────

class TestProjectDoc:
    def _project(self, **overrides):
        base = dict(title="Portfolio", description="d" * 20, technologies=["Python"])
        base.update(overrides)
        return ProjectDoc(**base)

    def test_defaults(self):
        p = self._project()
        assert p.status == "draft"
        assert p.views == 0
        assert p.likes == 0
        assert p.featured is False

    def test_duration_none_without_both_dates(self):
        assert self._project(start_date=now()).duration_days is None

    def test_duration_rounds_up(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        end = start + timedelta(days=3, hours=1)
        assert self._project(start_date=start, end_date=end).duration_days == 4


# ── SkillCategoryDoc ──────────────────────────────────────────────────────────

class TestSkillCategoryDoc:
    def test_embedded_skills_parsed(self):
        doc = SkillCategoryDoc.from_mongo(
            {
                "_id": oid(),
                "category": "Databases",
                "slug": "databases",
                "skills": [{"name": "SQL", "level": 80}],
            }
        )
        assert doc.skills == [SkillEntry(name="SQL", level=80)]

    @pytest.mark.parametrize("level", [-1, 101])
    def test_level_bounds(self, level):
        with pytest.raises(ValidationError):
            SkillEntry(name="SQL", level=level)


# ── AchievementDoc ────────────────────────────────────────────────────────────

class TestAchievementDoc:
    def test_defaults(self):
        a = AchievementDoc(
            title="Runner-up",
            description="Second place overall",
            category="Competition",
            date=datetime(2023, 12, 15, tzinfo=timezone.utc),
        )
        assert a.icon == "star"
        assert a.featured is False
        assert a.order == 1

    def test_order_must_be_positive(self):
        with pytest.raises(ValidationError):
            AchievementDoc(
                title="Runner-up",
                description="Second place overall",
                category="Competition",
                date=now(),
                order=0,
            )
