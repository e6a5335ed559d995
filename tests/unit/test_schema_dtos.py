"""Unit tests for request and response DTOs."""

from __future__ import annotations

import datetime as dt

import pytest
from bson import ObjectId
from pydantic import ValidationError

from schemas.dto.requests.achievement import CreateAchievementRequest
from schemas.dto.requests.auth import (
    ChangePasswordRequest,
    CreateAdminRequest,
    LoginRequest,
    UpdateAdminRequest,
)
from schemas.dto.requests.contact import (
    BulkContactStatusRequest,
    ContactRequest,
    ListContactsQuery,
)
from schemas.dto.requests.project import CreateProjectRequest, UpdateProjectRequest
from schemas.dto.requests.skill import AddSkillRequest, CreateSkillCategoryRequest
from schemas.dto.responses.achievement import AchievementResponse
from schemas.dto.responses.auth import AdminProfileResponse
from schemas.dto.responses.common import PaginationMeta
from schemas.dto.responses.project import ProjectResponse
from schemas.models.achievement import AchievementDoc
from schemas.models.admin import AdminDoc
from schemas.models.project import ProjectDoc


# ── Auth requests ─────────────────────────────────────────────────────────────


class TestLoginRequest:
    def test_valid(self):
        r = LoginRequest(email="admin@example.com", password="secret1")
        assert r.email == "admin@example.com"

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "password": "secret1"},
            {"email": "admin@example.com", "password": "short"},
            {"email": "admin@example.com"},
        ],
        ids=["bad_email", "short_password", "missing_password"],
    )
    def test_invalid(self, payload):
        with pytest.raises(ValidationError):
            LoginRequest(**payload)


class TestChangePasswordRequest:
    def test_accepts_camel_case(self):
        r = ChangePasswordRequest.model_validate(
            {"currentPassword": "old-pass", "newPassword": "new-pass"}
        )
        assert r.current_password == "old-pass"
        assert r.new_password == "new-pass"

    def test_accepts_snake_case(self):
        r = ChangePasswordRequest(current_password="old-pass", new_password="new-pass")
        assert r.new_password == "new-pass"


class TestAdminRequests:
    def test_create_defaults_to_admin_role(self):
        r = CreateAdminRequest(name="Jo", email="jo@example.com", password="secret1")
        assert r.role == "admin"

    def test_create_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            CreateAdminRequest(
                name="Jo", email="jo@example.com", password="secret1", role="root"
            )

    def test_update_has_no_password_field(self):
        r = UpdateAdminRequest.model_validate({"password": "ignored", "isActive": False})
        assert "password" not in r.model_dump()
        assert r.is_active is False


# ── Contact requests ──────────────────────────────────────────────────────────


class TestContactRequest:
    def _payload(self, **overrides):
        base = {
            "name": "Jo Doe",
            "email": "jo@example.com",
            "subject": "Project inquiry",
            "message": "I would like to talk about a project.",
        }
        base.update(overrides)
        return base

    def test_valid_strips_whitespace(self):
        r = ContactRequest(**self._payload(name="  Jo Doe  "))
        assert r.name == "Jo Doe"

    def test_blank_phone_becomes_none(self):
        assert ContactRequest(**self._payload(phone="   ")).phone is None

    @pytest.mark.parametrize(
        "field, value",
        [
            ("name", "J"),
            ("subject", "Hey"),
            ("message", "too short"),
            ("message", "x" * 1001),
            ("phone", "1" * 21),
        ],
    )
    def test_length_limits(self, field, value):
        with pytest.raises(ValidationError):
            ContactRequest(**self._payload(**{field: value}))


class TestContactQueries:
    def test_list_defaults(self):
        q = ListContactsQuery()
        assert (q.page, q.limit, q.status, q.search) == (1, 10, None, None)

    def test_bulk_requires_ids(self):
        with pytest.raises(ValidationError):
            BulkContactStatusRequest(ids=[], status="read")

    def test_bulk_parses_object_ids(self):
        o = ObjectId()
        r = BulkContactStatusRequest(ids=[str(o)], status="archived")
        assert r.ids == [o]


# ── Project requests ──────────────────────────────────────────────────────────


class TestCreateProjectRequest:
    def _payload(self, **overrides):
        base = {
            "title": "Portfolio site",
            "description": "A personal portfolio with an admin panel.",
            "category": "web-development",
            "technologies": ["Python", "FastAPI"],
        }
        base.update(overrides)
        return base

    def test_valid_with_aliases(self):
        r = CreateProjectRequest.model_validate(
            self._payload(liveUrl="https://example.com", shortDescription="Short")
        )
        assert r.live_url == "https://example.com"
        assert r.short_description == "Short"

    def test_empty_url_becomes_none(self):
        assert CreateProjectRequest(**self._payload(github_url="")).github_url is None

    def test_rejects_non_http_url(self):
        with pytest.raises(ValidationError):
            CreateProjectRequest(**self._payload(demo_url="ftp://example.com"))

    def test_requires_a_technology(self):
        with pytest.raises(ValidationError):
            CreateProjectRequest(**self._payload(technologies=["  "]))

    def test_rejects_long_feature(self):
        with pytest.raises(ValidationError):
            CreateProjectRequest(**self._payload(features=["x" * 201]))

    def test_rejects_end_before_start(self):
        with pytest.raises(ValidationError):
            CreateProjectRequest(
                **self._payload(start_date="2024-02-01", end_date="2024-01-01")
            )

    def test_rejects_unknown_category(self):
        with pytest.raises(ValidationError):
            CreateProjectRequest(**self._payload(category="games"))


def test_update_project_only_sets_given_fields():
    r = UpdateProjectRequest(featured=True)
    assert r.model_dump(exclude_unset=True) == {"featured": True}


# ── Skills / achievements ─────────────────────────────────────────────────────


def test_skill_requests_bounds():
    with pytest.raises(ValidationError):
        CreateSkillCategoryRequest(category="AI")
    with pytest.raises(ValidationError):
        AddSkillRequest(name="Go", level=101)


class TestCreateAchievementRequest:
    def test_parses_iso_date(self):
        r = CreateAchievementRequest(
            title="Hackathon",
            description="Won the hackathon",
            category="Competition",
            date="2023-12-15",
        )
        assert r.date == dt.date(2023, 12, 15)
        assert r.icon == "star"
        assert r.order is None

    def test_rejects_bad_date(self):
        with pytest.raises(ValidationError):
            CreateAchievementRequest(
                title="Hackathon",
                description="Won the hackathon",
                category="Competition",
                date="15/12/2023",
            )


# ── Responses ─────────────────────────────────────────────────────────────────


class TestPaginationMeta:
    @pytest.mark.parametrize(
        "page, limit, total, pages, has_next, has_prev",
        [
            (1, 10, 0, 0, False, False),
            (1, 10, 25, 3, True, False),
            (3, 10, 25, 3, False, True),
        ],
    )
    def test_build(self, page, limit, total, pages, has_next, has_prev):
        meta = PaginationMeta.build(page, limit, total)
        assert meta.total_pages == pages
        assert meta.has_next is has_next
        assert meta.has_prev is has_prev


def test_admin_profile_never_exposes_secrets():
    admin = AdminDoc(
        id=ObjectId(),
        name="Admin",
        email="admin@example.com",
        password_hash="hash",
        password_reset_token="digest",
    )
    data = AdminProfileResponse.from_doc(admin).model_dump()
    assert "password_hash" not in data
    assert "password_reset_token" not in data
    assert "login_attempts" not in data


def test_project_response_includes_duration():
    start = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)
    doc = ProjectDoc(
        id=ObjectId(),
        title="Portfolio",
        description="d" * 20,
        technologies=["Python"],
        start_date=start,
        end_date=start + dt.timedelta(days=10),
    )
    resp = ProjectResponse.from_doc(doc)
    assert resp.duration_days == 10
    assert resp.id == str(doc.id)


def test_achievement_response_reports_date_only():
    doc = AchievementDoc(
        id=ObjectId(),
        title="Runner-up",
        description="Second place overall",
        category="Competition",
        date=dt.datetime(2023, 12, 15, tzinfo=dt.timezone.utc),
    )
    assert AchievementResponse.from_doc(doc).model_dump(mode="json")["date"] == "2023-12-15"
