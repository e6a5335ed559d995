"""
Unit tests for the content services (contacts, projects, skills,
achievements) over AsyncMock repositories.
"""

import datetime as dt
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from errors import ConflictError, NotFoundError, ValidationError
from schemas.dto.requests.achievement import (
    CreateAchievementRequest,
    ListAchievementsQuery,
    UpdateAchievementRequest,
)
from schemas.dto.requests.contact import ContactRequest, ListContactsQuery
from schemas.dto.requests.project import (
    CreateProjectRequest,
    ListProjectsQuery,
    UpdateProjectRequest,
)
from schemas.dto.requests.skill import (
    AddSkillRequest,
    CreateSkillCategoryRequest,
    UpdateSkillRequest,
)
from schemas.models.achievement import AchievementDoc
from schemas.models.contact import ContactDoc
from schemas.models.project import ProjectDoc
from schemas.models.skill import SkillCategoryDoc, SkillEntry
from services.achievement_service import AchievementService
from services.contact_service import ContactService
from services.project_service import FEATURED_LIMIT, PUBLISHED, ProjectService
from services.skill_service import SkillService

OID = "507f1f77bcf86cd799439011"


def _contact(**overrides) -> ContactDoc:
    fields = dict(
        id=ObjectId(OID),
        name="Visitor",
        email="visitor@example.com",
        subject="Hello there",
        message="I would like to talk about a project.",
    )
    fields.update(overrides)
    return ContactDoc(**fields)


def _project(**overrides) -> ProjectDoc:
    fields = dict(
        id=ObjectId(OID),
        title="Portfolio Site",
        description="A personal portfolio site built with care.",
        technologies=["Python"],
    )
    fields.update(overrides)
    return ProjectDoc(**fields)


def _category(*skills) -> SkillCategoryDoc:
    return SkillCategoryDoc(
        id=ObjectId(OID),
        category="Databases",
        slug="databases",
        skills=[SkillEntry(name=n, level=lvl) for n, lvl in skills],
    )


def _achievement(**overrides) -> AchievementDoc:
    fields = dict(
        id=ObjectId(OID),
        title="Hackathon Winner",
        description="Won the regional hackathon",
        category="Competition",
        date=dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc),
    )
    fields.update(overrides)
    return AchievementDoc(**fields)


# ── ContactService ────────────────────────────────────────────────────────────


class TestContactService:
    @pytest.fixture
    def repo(self):
        repo = AsyncMock()
        repo.insert.side_effect = lambda c: c.model_copy(update={"id": ObjectId()})
        return repo

    @pytest.fixture
    def service(self, repo, email_provider):
        return ContactService(repo, email_provider)

    def _request(self):
        return ContactRequest(
            name="Visitor",
            email="visitor@example.com",
            subject="Hello there",
            message="I would like to talk about a project.",
        )

    async def test_submit_persists_then_emails(self, service, repo, email_provider):
        contact = await service.submit(self._request(), "1.2.3.4", "pytest")
        stored = repo.insert.call_args[0][0]
        assert stored.status == "unread"
        assert stored.ip_address == "1.2.3.4"
        assert stored.user_agent == "pytest"
        assert [kind for kind, _ in email_provider.sent] == [
            "contact_notification",
            "contact_confirmation",
        ]
        assert contact.id is not None

    async def test_submit_survives_email_failure(self, service, repo, email_provider):
        email_provider.result = False
        contact = await service.submit(self._request(), None, None)
        repo.insert.assert_awaited_once()
        assert contact.status == "unread"

    async def test_list_builds_filter_and_paging(self, service, repo):
        repo.find_page.return_value = [_contact()]
        repo.count.return_value = 21
        items, total = await service.list_contacts(
            ListContactsQuery(page=3, limit=10, status="read", search="proj")
        )
        query = repo.find_page.call_args[0][0]
        assert query["status"] == "read"
        assert len(query["$or"]) == 3
        assert repo.find_page.call_args.kwargs == {"skip": 20, "limit": 10}
        assert total == 21 and len(items) == 1

    async def test_get_marks_unread_as_read(self, service, repo):
        repo.find_by_id.return_value = _contact()
        repo.mark_read.return_value = _contact(status="read")
        contact = await service.get(OID)
        assert contact.status == "read"
        repo.mark_read.assert_awaited_once()

    async def test_get_leaves_other_status(self, service, repo):
        repo.find_by_id.return_value = _contact(status="replied")
        contact = await service.get(OID)
        assert contact.status == "replied"
        repo.mark_read.assert_not_awaited()

    @pytest.mark.parametrize("contact_id", ["bad-id", OID])
    async def test_get_missing(self, service, repo, contact_id):
        repo.find_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await service.get(contact_id)

    async def test_update_status_missing(self, service, repo):
        repo.update_status.return_value = None
        with pytest.raises(NotFoundError):
            await service.update_status(OID, "archived")

    async def test_delete_missing(self, service, repo):
        repo.delete.return_value = False
        with pytest.raises(NotFoundError):
            await service.delete(OID)

    async def test_bulk_update_returns_count(self, service, repo):
        repo.bulk_update_status.return_value = 2
        assert await service.bulk_update_status([ObjectId(), ObjectId()], "read") == 2

    async def test_stats(self, service, repo):
        repo.count_by_status.return_value = {
            "unread": 2, "read": 1, "replied": 0, "archived": 1,
        }
        repo.count.return_value = 1
        stats = await service.stats()
        assert stats["total"] == 4
        assert stats["today"] == 1
        assert stats["by_status"]["unread"] == 2


# ── ProjectService ────────────────────────────────────────────────────────────


class TestProjectService:
    @pytest.fixture
    def repo(self):
        repo = AsyncMock()
        repo.insert.side_effect = lambda p: p.model_copy(update={"id": ObjectId()})
        return repo

    @pytest.fixture
    def uploads(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, repo, uploads):
        return ProjectService(repo, uploads)

    async def test_public_list_only_published(self, service, repo):
        repo.find_many.return_value = []
        repo.count.return_value = 0
        await service.list_published(ListProjectsQuery(category="ai-ml", search="bot"))
        query = repo.find_many.call_args[0][0]
        assert query["status"] == "published"
        assert query["category"] == "ai-ml"
        assert "$or" in query

    async def test_featured_limited(self, service, repo):
        repo.find_many.return_value = []
        await service.featured()
        assert repo.find_many.call_args[0][0] == {**PUBLISHED, "featured": True}
        assert repo.find_many.call_args.kwargs["limit"] == FEATURED_LIMIT

    async def test_unknown_category(self, service):
        with pytest.raises(ValidationError):
            await service.by_category("games")

    async def test_view_counts_published_only(self, service, repo):
        repo.increment_views.return_value = _project(status="published", views=1)
        project = await service.view(OID)
        assert project.views == 1
        assert repo.increment_views.call_args[0][1] == PUBLISHED

    async def test_view_of_draft_is_not_found(self, service, repo):
        repo.increment_views.return_value = None
        with pytest.raises(NotFoundError):
            await service.view(OID)

    async def test_like(self, service, repo):
        repo.increment_likes.return_value = _project(likes=3)
        assert (await service.like(OID)).likes == 3

    async def test_create(self, service, repo):
        request = CreateProjectRequest.model_validate(
            {
                "title": "Portfolio Site",
                "description": "A personal portfolio site built with care.",
                "category": "web-development",
                "technologies": ["Python", "FastAPI"],
                "startDate": "2024-01-01T00:00:00",
            }
        )
        project = await service.create(request)
        assert project.start_date.tzinfo is not None
        assert project.status == "draft"

    async def test_update_rejects_end_before_start(self, service, repo):
        repo.find_by_id.return_value = _project(
            start_date=dt.datetime(2024, 5, 1, tzinfo=dt.timezone.utc)
        )
        with pytest.raises(ValidationError):
            await service.update(
                OID, UpdateProjectRequest.model_validate({"endDate": "2024-04-01T00:00:00Z"})
            )
        repo.update_fields.assert_not_awaited()

    async def test_update_ignores_null_required_fields(self, service, repo):
        repo.find_by_id.return_value = _project()
        repo.update_fields.return_value = _project(order=2)
        await service.update(OID, UpdateProjectRequest.model_validate({"title": None, "order": 2}))
        fields = repo.update_fields.call_args[0][1]
        assert fields == {"order": 2}

    async def test_delete_removes_images(self, service, repo, uploads):
        repo.delete.return_value = _project(image="a.png", images=["b.png", "c.png"])
        await service.delete(OID)
        assert uploads.delete_by_url.await_count == 3

    async def test_delete_missing(self, service, repo):
        repo.delete.return_value = None
        with pytest.raises(NotFoundError):
            await service.delete(OID)

    async def test_replace_image_drops_old_file(self, service, repo, uploads):
        repo.find_by_id.return_value = _project(image="old.png")
        uploads.save_image.return_value = "new.png"
        repo.update_fields.return_value = _project(image="new.png")
        project = await service.replace_image(OID, object())
        assert project.image == "new.png"
        uploads.delete_by_url.assert_awaited_once_with("old.png")

    async def test_stats(self, service, repo):
        repo.count.side_effect = [5, 3, 1]
        repo.stats_by_category.return_value = {"ai-ml": {"count": 1, "views": 0, "likes": 0}}
        stats = await service.stats()
        assert (stats["total"], stats["published"], stats["featured"]) == (5, 3, 1)


# ── SkillService ──────────────────────────────────────────────────────────────


class TestSkillService:
    @pytest.fixture
    def repo(self):
        return AsyncMock()

    @pytest.fixture
    def service(self, repo):
        return SkillService(repo)

    async def test_create_category_slug(self, service, repo):
        repo.category_exists.return_value = False
        repo.insert.side_effect = lambda c: c
        category = await service.create_category(
            CreateSkillCategoryRequest(category="Cloud Platforms")
        )
        assert category.slug == "cloud-platforms"
        assert category.skills == []

    async def test_create_category_duplicate(self, service, repo):
        repo.category_exists.return_value = True
        with pytest.raises(ConflictError):
            await service.create_category(CreateSkillCategoryRequest(category="Databases"))

    async def test_create_category_index_race(self, service, repo):
        repo.category_exists.return_value = False
        repo.insert.side_effect = DuplicateKeyError("E11000")
        with pytest.raises(ConflictError):
            await service.create_category(CreateSkillCategoryRequest(category="Databases"))

    async def test_get_by_slug_missing(self, service, repo):
        repo.find_by_slug.return_value = None
        with pytest.raises(NotFoundError):
            await service.get_by_slug("nope")

    async def test_add_skill(self, service, repo):
        repo.find_by_id.return_value = _category()
        repo.push_skill.return_value = _category(("SQL", 80))
        category = await service.add_skill(OID, AddSkillRequest(name="SQL", level=80))
        assert category.skills[0].name == "SQL"

    async def test_add_duplicate_skill(self, service, repo):
        repo.find_by_id.return_value = _category(("SQL", 80))
        repo.push_skill.return_value = None
        with pytest.raises(ConflictError):
            await service.add_skill(OID, AddSkillRequest(name="sql", level=50))

    async def test_update_skill_case_insensitive_lookup(self, service, repo):
        repo.find_by_id.return_value = _category(("MongoDB", 70))
        repo.set_skill.return_value = _category(("MongoDB", 75))
        await service.update_skill(OID, "mongodb", UpdateSkillRequest(level=75))
        _, current_name, replacement, _ = repo.set_skill.call_args[0]
        assert current_name == "MongoDB"
        assert replacement == SkillEntry(name="MongoDB", level=75)

    async def test_update_skill_rename_conflict(self, service, repo):
        repo.find_by_id.return_value = _category(("SQL", 80), ("MySQL", 75))
        with pytest.raises(ConflictError):
            await service.update_skill(OID, "SQL", UpdateSkillRequest(name="mysql"))

    async def test_update_missing_skill(self, service, repo):
        repo.find_by_id.return_value = _category(("SQL", 80))
        with pytest.raises(NotFoundError):
            await service.update_skill(OID, "Redis", UpdateSkillRequest(level=1))

    async def test_delete_skill_returns_removed(self, service, repo):
        repo.find_by_id.return_value = _category(("SQL", 80))
        repo.pull_skill.return_value = _category()
        removed = await service.delete_skill(OID, "sql")
        assert removed == SkillEntry(name="SQL", level=80)

    async def test_delete_category_missing(self, service, repo):
        repo.delete.return_value = False
        with pytest.raises(NotFoundError):
            await service.delete_category(OID)

    async def test_stats(self, service, repo):
        empty = SkillCategoryDoc(category="Empty", slug="empty")
        repo.list_all.return_value = [_category(("SQL", 80), ("MySQL", 75)), empty]
        stats = await service.stats()
        assert stats["total_categories"] == 2
        assert stats["total_skills"] == 2
        assert stats["average_level"] == 78
        assert stats["categories"][1] == {
            "name": "Empty", "skill_count": 0, "average_level": 0,
        }


# ── AchievementService ────────────────────────────────────────────────────────


class TestAchievementService:
    @pytest.fixture
    def repo(self):
        repo = AsyncMock()
        repo.insert.side_effect = lambda a: a.model_copy(update={"id": ObjectId()})
        return repo

    @pytest.fixture
    def service(self, repo):
        return AchievementService(repo)

    def _request(self, **overrides):
        data = dict(
            title="Hackathon Winner",
            description="Won the regional hackathon",
            category="Competition",
            date="2024-03-10",
        )
        data.update(overrides)
        return CreateAchievementRequest.model_validate(data)

    async def test_create_defaults_order_to_next(self, service, repo):
        repo.title_taken.return_value = False
        repo.count.return_value = 3
        achievement = await service.create(self._request())
        assert achievement.order == 4
        assert achievement.date == dt.datetime(2024, 3, 10, tzinfo=dt.timezone.utc)

    async def test_create_keeps_explicit_order(self, service, repo):
        repo.title_taken.return_value = False
        achievement = await service.create(self._request(order=1))
        assert achievement.order == 1
        repo.count.assert_not_awaited()

    async def test_create_duplicate_title(self, service, repo):
        repo.title_taken.return_value = True
        with pytest.raises(ConflictError) as exc:
            await service.create(self._request())
        assert exc.value.field == "title"

    async def test_list_filters(self, service, repo):
        repo.find_many.return_value = []
        await service.list_achievements(
            ListAchievementsQuery(featured=True, category="competition")
        )
        query = repo.find_many.call_args[0][0]
        assert query["featured"] is True
        assert query["category"]["$options"] == "i"

    async def test_update_same_title_different_case_skips_check(self, service, repo):
        repo.find_by_id.return_value = _achievement()
        repo.update_fields.return_value = _achievement(title="HACKATHON WINNER")
        await service.update(OID, UpdateAchievementRequest(title="HACKATHON WINNER"))
        repo.title_taken.assert_not_awaited()

    async def test_update_title_taken(self, service, repo):
        repo.find_by_id.return_value = _achievement()
        repo.title_taken.return_value = True
        with pytest.raises(ConflictError):
            await service.update(OID, UpdateAchievementRequest(title="Other Title"))

    async def test_toggle_missing(self, service, repo):
        repo.toggle_featured.return_value = None
        with pytest.raises(NotFoundError):
            await service.toggle_featured(OID)

    async def test_stats(self, service, repo):
        repo.count.side_effect = [3, 2]
        repo.count_by_category.return_value = [{"name": "Competition", "count": 3}]
        repo.find_recent.return_value = [_achievement()]
        stats = await service.stats()
        assert stats["total_achievements"] == 3
        assert stats["featured_count"] == 2
        assert len(stats["recent_achievements"]) == 1
        repo.find_recent.assert_awaited_once_with(5)
