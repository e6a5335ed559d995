"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Long-lived collaborators (token service, email
provider, upload store, Redis) are built once in the app lifespan and read
from app.state; repositories and services are cheap and built per request.
"""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import AppSettings
from errors import AuthenticationError, ForbiddenError, RateLimitError
from infrastructure.email.protocol import EmailProvider
from infrastructure.rate_limiter import RateLimiter
from repositories.achievement_repository import AchievementRepository
from repositories.admin_repository import AdminRepository
from repositories.contact_repository import ContactRepository
from repositories.project_repository import ProjectRepository
from repositories.skill_repository import SkillRepository
from schemas.models.admin import ROLE_ADMIN, ROLE_SUPER_ADMIN, AdminDoc
from services.achievement_service import AchievementService
from services.admin_service import AdminService
from services.auth_service import AuthService
from services.contact_service import ContactService
from services.project_service import ProjectService
from services.skill_service import SkillService
from services.token_service import TokenService
from services.upload_service import UploadService
from shared.ip_utils import get_client_ip
from shared.logging import get_logger

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


async def get_redis(request: Request):
    """Return the async Redis client from app.state (may be None if not configured)."""
    return request.app.state.redis


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_email_provider(request: Request) -> EmailProvider:
    return request.app.state.email_provider


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


async def get_rate_limiter(redis=Depends(get_redis)) -> RateLimiter:
    return RateLimiter(redis)


# ── Repositories ─────────────────────────────────────────────────────────────


async def get_admin_repo(db=Depends(get_db)) -> AdminRepository:
    return AdminRepository(db)


async def get_contact_repo(db=Depends(get_db)) -> ContactRepository:
    return ContactRepository(db)


async def get_project_repo(db=Depends(get_db)) -> ProjectRepository:
    return ProjectRepository(db)


async def get_skill_repo(db=Depends(get_db)) -> SkillRepository:
    return SkillRepository(db)


async def get_achievement_repo(db=Depends(get_db)) -> AchievementRepository:
    return AchievementRepository(db)


# ── Services ─────────────────────────────────────────────────────────────────


async def get_auth_service(
    admin_repo: AdminRepository = Depends(get_admin_repo),
    token_service: TokenService = Depends(get_token_service),
    email_provider: EmailProvider = Depends(get_email_provider),
    settings: AppSettings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        admin_repo,
        token_service,
        email_provider,
        settings.lockout,
        settings.frontend_url,
    )


async def get_admin_service(
    admin_repo: AdminRepository = Depends(get_admin_repo),
    email_provider: EmailProvider = Depends(get_email_provider),
) -> AdminService:
    return AdminService(admin_repo, email_provider)


async def get_contact_service(
    contact_repo: ContactRepository = Depends(get_contact_repo),
    email_provider: EmailProvider = Depends(get_email_provider),
) -> ContactService:
    return ContactService(contact_repo, email_provider)


async def get_project_service(
    project_repo: ProjectRepository = Depends(get_project_repo),
    uploads: UploadService = Depends(get_upload_service),
) -> ProjectService:
    return ProjectService(project_repo, uploads)


async def get_skill_service(
    skill_repo: SkillRepository = Depends(get_skill_repo),
) -> SkillService:
    return SkillService(skill_repo)


async def get_achievement_service(
    achievement_repo: AchievementRepository = Depends(get_achievement_repo),
) -> AchievementService:
    return AchievementService(achievement_repo)


# ── Auth ─────────────────────────────────────────────────────────────────────


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> AdminDoc:
    """Resolve the ``Authorization: Bearer`` header to an admin account.

    Raises AuthenticationError (401) for a missing header or any token the
    auth service rejects.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized to access this route")
    return await auth_service.authenticate_token(credentials.credentials)


def require_roles(*roles: str) -> Callable:
    """Dependency factory: allow only admins whose role is in *roles*."""
    allowed = frozenset(roles)

    async def _guard(admin: AdminDoc = Depends(get_current_admin)) -> AdminDoc:
        if admin.role not in allowed:
            log.warning(
                "role_forbidden", admin_id=str(admin.id), role=admin.role
            )
            raise ForbiddenError(
                f"Role {admin.role} is not authorized to access this route"
            )
        return admin

    return _guard


require_admin = require_roles(ROLE_ADMIN, ROLE_SUPER_ADMIN)
require_super_admin = require_roles(ROLE_SUPER_ADMIN)


# ── Rate limiting ────────────────────────────────────────────────────────────


def rate_limit(scope: str, limit_setting: Optional[str] = None) -> Callable:
    """Dependency factory: per-client fixed-window limit for *scope*.

    *limit_setting* names a RateLimitSettings attribute overriding the
    default request budget.
    """

    async def _check(
        request: Request,
        response: Response,
        limiter: RateLimiter = Depends(get_rate_limiter),
        settings: AppSettings = Depends(get_settings),
    ) -> None:
        if not limiter.enabled:
            return
        cfg = settings.rate_limit
        limit = getattr(cfg, limit_setting) if limit_setting else cfg.rate_limit_requests
        result = await limiter.hit(
            scope, get_client_ip(request) or "unknown", limit, cfg.rate_limit_window_seconds
        )
        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        if not result.allowed:
            log.warning("rate_limit_exceeded", scope=scope, path=request.url.path)
            raise RateLimitError(
                "Too many requests from this IP, please try again later.",
                details={"retry_after": result.reset_after},
            )

    return _check
