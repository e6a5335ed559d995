"""
Health check and API info endpoints.

GET /api/health: checks MongoDB and Redis connectivity.
Rules:
- MongoDB failure → "unhealthy" (503); the app cannot function without it.
- Redis failure or absence → "degraded" (200); Redis is optional.

GET /api: service name, version and the map of resource endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from schemas.dto.responses.common import ApiInfoResponse, HealthResponse
from shared.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

API_VERSION = "1.0.0"

ENDPOINTS = {
    "health": "/api/health",
    "contact": "/api/contact",
    "projects": "/api/projects",
    "skills": "/api/skills",
    "achievements": "/api/achievements",
    "admin": "/api/admin",
}


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    try:
        db = request.app.state.db
        await db.client.admin.command("ping")
        checks["mongodb"] = "ok"
    except Exception as e:
        log.error("health_mongodb_failed", error=str(e), error_type=type(e).__name__)
        checks["mongodb"] = "error"
        overall = "unhealthy"

    redis = request.app.state.redis
    if redis is None:
        checks["redis"] = "not_configured"
        if overall == "healthy":
            overall = "degraded"
    else:
        try:
            await redis.ping()
            checks["redis"] = "ok"
        except Exception as e:
            log.warning("health_redis_failed", error=str(e))
            checks["redis"] = "error"
            if overall == "healthy":
                overall = "degraded"

    status_code = 503 if overall == "unhealthy" else 200
    body = HealthResponse(status=overall, checks=checks)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get("", response_model=ApiInfoResponse)
async def api_info(request: Request) -> ApiInfoResponse:
    return ApiInfoResponse(
        message=f"Welcome to the {request.app.title}",
        version=API_VERSION,
        endpoints=ENDPOINTS,
    )
