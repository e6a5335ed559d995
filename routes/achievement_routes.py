"""
Achievements.

Public: list (featured/category filters), featured, stats, by category, detail.
Admin:  create / update / delete / toggle-featured.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dependencies import get_achievement_service, rate_limit, require_admin
from schemas.dto.requests.achievement import (
    CreateAchievementRequest,
    ListAchievementsQuery,
    UpdateAchievementRequest,
)
from schemas.dto.responses.achievement import (
    AchievementCategoryCount,
    AchievementResponse,
    AchievementStatsResponse,
)
from schemas.dto.responses.common import MessageResponse
from services.achievement_service import AchievementService

router = APIRouter(
    prefix="/api/achievements",
    tags=["achievements"],
    dependencies=[Depends(rate_limit("api"))],
)


@router.get("", response_model=list[AchievementResponse])
async def list_achievements(
    query: ListAchievementsQuery = Depends(),
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> list[AchievementResponse]:
    return [
        AchievementResponse.from_doc(a)
        for a in await achievement_service.list_achievements(query)
    ]


@router.get("/featured", response_model=list[AchievementResponse])
async def featured_achievements(
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> list[AchievementResponse]:
    return [AchievementResponse.from_doc(a) for a in await achievement_service.featured()]


@router.get("/stats", response_model=AchievementStatsResponse)
async def achievement_stats(
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> AchievementStatsResponse:
    stats = await achievement_service.stats()
    return AchievementStatsResponse(
        total_achievements=stats["total_achievements"],
        featured_count=stats["featured_count"],
        categories=[AchievementCategoryCount(**c) for c in stats["categories"]],
        recent_achievements=[
            AchievementResponse.from_doc(a) for a in stats["recent_achievements"]
        ],
    )


@router.get("/category/{category}", response_model=list[AchievementResponse])
async def achievements_by_category(
    category: str,
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> list[AchievementResponse]:
    return [
        AchievementResponse.from_doc(a)
        for a in await achievement_service.by_category(category)
    ]


@router.get("/{achievement_id}", response_model=AchievementResponse)
async def get_achievement(
    achievement_id: str,
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> AchievementResponse:
    return AchievementResponse.from_doc(await achievement_service.get(achievement_id))


@router.post(
    "",
    response_model=AchievementResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_achievement(
    body: CreateAchievementRequest,
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> AchievementResponse:
    return AchievementResponse.from_doc(await achievement_service.create(body))


@router.put(
    "/{achievement_id}",
    response_model=AchievementResponse,
    dependencies=[Depends(require_admin)],
)
async def update_achievement(
    achievement_id: str,
    body: UpdateAchievementRequest,
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> AchievementResponse:
    return AchievementResponse.from_doc(
        await achievement_service.update(achievement_id, body)
    )


@router.delete(
    "/{achievement_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_achievement(
    achievement_id: str,
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> MessageResponse:
    await achievement_service.delete(achievement_id)
    return MessageResponse(success=True, message="Achievement deleted successfully")


@router.put(
    "/{achievement_id}/toggle-featured",
    response_model=AchievementResponse,
    dependencies=[Depends(require_admin)],
)
async def toggle_featured(
    achievement_id: str,
    achievement_service: AchievementService = Depends(get_achievement_service),
) -> AchievementResponse:
    return AchievementResponse.from_doc(
        await achievement_service.toggle_featured(achievement_id)
    )
