"""
Portfolio projects: public browsing plus admin management.
"""

from __future__ import annotations

from typing import Any

from fastapi import UploadFile

from errors import NotFoundError, ValidationError
from repositories.base import as_object_id
from repositories.project_repository import ProjectRepository
from schemas.dto.requests.project import (
    CreateProjectRequest,
    ListProjectsQuery,
    UpdateProjectRequest,
)
from schemas.models.project import PROJECT_CATEGORIES, ProjectDoc
from services.upload_service import UploadService
from shared.datetime_utils import ensure_utc, utcnow
from shared.logging import get_logger
from shared.validators import search_regex

log = get_logger(__name__)

PUBLISHED = {"status": "published"}
FEATURED_LIMIT = 6


class ProjectService:
    def __init__(self, project_repo: ProjectRepository, uploads: UploadService) -> None:
        self._projects = project_repo
        self._uploads = uploads

    async def list_published(self, query: ListProjectsQuery) -> tuple[list[ProjectDoc], int]:
        mongo_query: dict[str, Any] = dict(PUBLISHED)
        if query.category:
            mongo_query["category"] = query.category
        if query.featured is not None:
            mongo_query["featured"] = query.featured
        if query.search:
            pattern = search_regex(query.search)
            mongo_query["$or"] = [
                {"title": pattern},
                {"description": pattern},
                {"technologies": pattern},
            ]
        skip = (query.page - 1) * query.limit
        items = await self._projects.find_many(mongo_query, skip=skip, limit=query.limit)
        total = await self._projects.count(mongo_query)
        return items, total

    async def featured(self) -> list[ProjectDoc]:
        return await self._projects.find_many(
            {**PUBLISHED, "featured": True}, limit=FEATURED_LIMIT
        )

    async def by_category(self, category: str) -> list[ProjectDoc]:
        if category not in PROJECT_CATEGORIES:
            raise ValidationError(
                f"Unknown category; expected one of {', '.join(PROJECT_CATEGORIES)}",
                field="category",
            )
        return await self._projects.find_many({**PUBLISHED, "category": category})

    async def view(self, project_id: str) -> ProjectDoc:
        """Return a published project, counting the view atomically."""
        oid = as_object_id(project_id)
        project = await self._projects.increment_views(oid, PUBLISHED) if oid else None
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def like(self, project_id: str) -> ProjectDoc:
        oid = as_object_id(project_id)
        project = await self._projects.increment_likes(oid) if oid else None
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def create(self, request: CreateProjectRequest) -> ProjectDoc:
        now = utcnow()
        fields = request.model_dump()
        fields["start_date"] = ensure_utc(fields["start_date"])
        fields["end_date"] = ensure_utc(fields["end_date"])
        project = await self._projects.insert(
            ProjectDoc(**fields, created_at=now, updated_at=now)
        )
        log.info("project_created", project_id=str(project.id), status=project.status)
        return project

    async def _get(self, project_id: str) -> ProjectDoc:
        oid = as_object_id(project_id)
        project = await self._projects.find_by_id(oid) if oid else None
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def update(self, project_id: str, request: UpdateProjectRequest) -> ProjectDoc:
        project = await self._get(project_id)
        fields = request.model_dump(exclude_unset=True)
        for key in ("start_date", "end_date"):
            if key in fields:
                fields[key] = ensure_utc(fields[key])

        start = fields.get("start_date", project.start_date)
        end = fields.get("end_date", project.end_date)
        if start and end and ensure_utc(end) < ensure_utc(start):
            raise ValidationError("endDate cannot be before startDate", field="end_date")

        # Required fields cannot be cleared with an explicit null
        for key in ("title", "description", "category", "technologies", "status",
                    "featured", "order", "features"):
            if key in fields and fields[key] is None:
                fields.pop(key)

        updated = await self._projects.update_fields(project.id, fields, utcnow())
        if updated is None:
            raise NotFoundError("Project not found")
        log.info("project_updated", project_id=project_id, fields=sorted(fields))
        return updated

    async def delete(self, project_id: str) -> None:
        oid = as_object_id(project_id)
        project = await self._projects.delete(oid) if oid else None
        if project is None:
            raise NotFoundError("Project not found")
        await self._uploads.delete_by_url(project.image)
        for image in project.images:
            await self._uploads.delete_by_url(image)
        log.info("project_deleted", project_id=project_id)

    async def toggle_featured(self, project_id: str) -> ProjectDoc:
        oid = as_object_id(project_id)
        project = await self._projects.toggle_featured(oid, utcnow()) if oid else None
        if project is None:
            raise NotFoundError("Project not found")
        log.info("project_featured_toggled", project_id=project_id, featured=project.featured)
        return project

    async def replace_image(self, project_id: str, upload: UploadFile) -> ProjectDoc:
        project = await self._get(project_id)
        url = await self._uploads.save_image(upload, "projects")
        updated = await self._projects.update_fields(project.id, {"image": url}, utcnow())
        if updated is None:
            await self._uploads.delete_by_url(url)
            raise NotFoundError("Project not found")
        await self._uploads.delete_by_url(project.image)
        return updated

    async def stats(self) -> dict[str, Any]:
        return {
            "total": await self._projects.count(),
            "published": await self._projects.count(PUBLISHED),
            "featured": await self._projects.count({"featured": True}),
            "by_category": await self._projects.stats_by_category(),
        }
