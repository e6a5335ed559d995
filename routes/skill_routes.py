"""
Skills grouped by category.

Public: GET /api/skills, /api/skills/stats, /api/skills/category/{slug}
Admin:  category create/delete, skill add/update/delete
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dependencies import get_skill_service, rate_limit, require_admin
from schemas.dto.requests.skill import (
    AddSkillRequest,
    CreateSkillCategoryRequest,
    UpdateSkillRequest,
)
from schemas.dto.responses.common import MessageResponse
from schemas.dto.responses.skill import SkillCategoryResponse, SkillStatsResponse
from services.skill_service import SkillService

router = APIRouter(
    prefix="/api/skills",
    tags=["skills"],
    dependencies=[Depends(rate_limit("api"))],
)


@router.get("", response_model=list[SkillCategoryResponse])
async def list_skills(
    skill_service: SkillService = Depends(get_skill_service),
) -> list[SkillCategoryResponse]:
    return [SkillCategoryResponse.from_doc(c) for c in await skill_service.list_categories()]


@router.get("/stats", response_model=SkillStatsResponse)
async def skill_stats(
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillStatsResponse:
    return SkillStatsResponse(**await skill_service.stats())


@router.get("/category/{slug}", response_model=SkillCategoryResponse)
async def skills_by_category(
    slug: str,
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillCategoryResponse:
    return SkillCategoryResponse.from_doc(await skill_service.get_by_slug(slug))


@router.post(
    "/category",
    response_model=SkillCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_category(
    body: CreateSkillCategoryRequest,
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillCategoryResponse:
    return SkillCategoryResponse.from_doc(await skill_service.create_category(body))


@router.post(
    "/category/{category_id}",
    response_model=SkillCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def add_skill(
    category_id: str,
    body: AddSkillRequest,
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillCategoryResponse:
    return SkillCategoryResponse.from_doc(await skill_service.add_skill(category_id, body))


@router.put(
    "/category/{category_id}/skill/{skill_name}",
    response_model=SkillCategoryResponse,
    dependencies=[Depends(require_admin)],
)
async def update_skill(
    category_id: str,
    skill_name: str,
    body: UpdateSkillRequest,
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillCategoryResponse:
    return SkillCategoryResponse.from_doc(
        await skill_service.update_skill(category_id, skill_name, body)
    )


@router.delete(
    "/category/{category_id}/skill/{skill_name}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_skill(
    category_id: str,
    skill_name: str,
    skill_service: SkillService = Depends(get_skill_service),
) -> MessageResponse:
    removed = await skill_service.delete_skill(category_id, skill_name)
    return MessageResponse(success=True, message=f"Skill {removed.name} deleted successfully")


@router.delete(
    "/category/{category_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_category(
    category_id: str,
    skill_service: SkillService = Depends(get_skill_service),
) -> MessageResponse:
    await skill_service.delete_category(category_id)
    return MessageResponse(success=True, message="Skill category deleted successfully")
