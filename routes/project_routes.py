"""
Portfolio projects.

Public: list / featured / by category / detail (counts a view) / like.
Admin:  create / update / delete / toggle-featured / image upload / stats.

Static paths (/featured, /stats, /category/...) are declared before
/{project_id} so they are not captured as ids.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile, status

from dependencies import get_project_service, rate_limit, require_admin
from schemas.dto.requests.project import (
    CreateProjectRequest,
    ListProjectsQuery,
    UpdateProjectRequest,
)
from schemas.dto.responses.common import MessageResponse, PaginationMeta
from schemas.dto.responses.project import (
    LikeResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectStatsResponse,
)
from services.project_service import ProjectService

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    dependencies=[Depends(rate_limit("api"))],
)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    query: ListProjectsQuery = Depends(),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    items, total = await project_service.list_published(query)
    return ProjectListResponse(
        items=[ProjectResponse.from_doc(p) for p in items],
        pagination=PaginationMeta.build(query.page, query.limit, total),
    )


@router.get("/featured", response_model=list[ProjectResponse])
async def featured_projects(
    project_service: ProjectService = Depends(get_project_service),
) -> list[ProjectResponse]:
    return [ProjectResponse.from_doc(p) for p in await project_service.featured()]


@router.get(
    "/stats", response_model=ProjectStatsResponse, dependencies=[Depends(require_admin)]
)
async def project_stats(
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectStatsResponse:
    return ProjectStatsResponse(**await project_service.stats())


@router.get("/category/{category}", response_model=list[ProjectResponse])
async def projects_by_category(
    category: str,
    project_service: ProjectService = Depends(get_project_service),
) -> list[ProjectResponse]:
    return [ProjectResponse.from_doc(p) for p in await project_service.by_category(category)]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse.from_doc(await project_service.view(project_id))


@router.post("/{project_id}/like", response_model=LikeResponse)
async def like_project(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> LikeResponse:
    project = await project_service.like(project_id)
    return LikeResponse(likes=project.likes)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_project(
    body: CreateProjectRequest,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse.from_doc(await project_service.create(body))


@router.put(
    "/{project_id}", response_model=ProjectResponse, dependencies=[Depends(require_admin)]
)
async def update_project(
    project_id: str,
    body: UpdateProjectRequest,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse.from_doc(await project_service.update(project_id, body))


@router.delete(
    "/{project_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)]
)
async def delete_project(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> MessageResponse:
    await project_service.delete(project_id)
    return MessageResponse(success=True, message="Project deleted successfully")


@router.put(
    "/{project_id}/toggle-featured",
    response_model=ProjectResponse,
    dependencies=[Depends(require_admin)],
)
async def toggle_featured(
    project_id: str,
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse.from_doc(await project_service.toggle_featured(project_id))


@router.post(
    "/{project_id}/image",
    response_model=ProjectResponse,
    dependencies=[Depends(require_admin)],
)
async def upload_project_image(
    project_id: str,
    image: UploadFile = File(...),
    project_service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return ProjectResponse.from_doc(await project_service.replace_image(project_id, image))
