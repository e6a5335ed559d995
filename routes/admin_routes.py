"""
Admin authentication and account management.

POST /api/admin/login                 — public (strict rate limit)
POST /api/admin/forgot-password       — public (strict rate limit)
PUT  /api/admin/reset-password/{token} — public
PUT  /api/admin/change-password       — any admin
GET/PUT /api/admin/profile            — any admin
GET  /api/admin/stats                 — super-admin
GET/POST /api/admin                   — super-admin
PUT/DELETE /api/admin/{admin_id}      — super-admin
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from dependencies import (
    get_admin_service,
    get_auth_service,
    get_current_admin,
    get_token_service,
    rate_limit,
    require_super_admin,
)
from schemas.dto.requests.auth import (
    ChangePasswordRequest,
    CreateAdminRequest,
    ForgotPasswordRequest,
    LoginRequest,
    ResetPasswordRequest,
    UpdateAdminRequest,
    UpdateProfileRequest,
)
from schemas.dto.responses.auth import (
    AdminProfileResponse,
    AdminStatsResponse,
    LoginResponse,
)
from schemas.dto.responses.common import MessageResponse
from schemas.models.admin import AdminDoc
from services.admin_service import AdminService
from services.auth_service import AuthService
from services.token_service import TokenService

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(rate_limit("api"))],
)


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(rate_limit("login", "login_rate_limit"))],
)
async def login(
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
    token_service: TokenService = Depends(get_token_service),
) -> LoginResponse:
    token, admin = await auth_service.login(body.email, body.password)
    return LoginResponse(
        access_token=token,
        expires_in=token_service.ttl_seconds,
        admin=AdminProfileResponse.from_doc(admin),
    )


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    dependencies=[Depends(rate_limit("forgot_password", "login_rate_limit"))],
)
async def forgot_password(
    body: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.request_password_reset(body.email)
    return MessageResponse(success=True, message="Password reset email sent")


@router.put("/reset-password/{token}", response_model=MessageResponse)
async def reset_password(
    token: str,
    body: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.complete_password_reset(token, body.password)
    return MessageResponse(success=True, message="Password reset successful")


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    admin: AdminDoc = Depends(get_current_admin),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.change_password(admin, body.current_password, body.new_password)
    return MessageResponse(success=True, message="Password updated successfully")


@router.get("/profile", response_model=AdminProfileResponse)
async def get_profile(admin: AdminDoc = Depends(get_current_admin)) -> AdminProfileResponse:
    return AdminProfileResponse.from_doc(admin)


@router.put("/profile", response_model=AdminProfileResponse)
async def update_profile(
    body: UpdateProfileRequest,
    admin: AdminDoc = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminProfileResponse:
    updated = await admin_service.update_profile(admin, body)
    return AdminProfileResponse.from_doc(updated)


@router.get("/stats", response_model=AdminStatsResponse)
async def admin_stats(
    _: AdminDoc = Depends(require_super_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminStatsResponse:
    return AdminStatsResponse(**await admin_service.stats())


@router.get("", response_model=list[AdminProfileResponse])
async def list_admins(
    _: AdminDoc = Depends(require_super_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> list[AdminProfileResponse]:
    return [AdminProfileResponse.from_doc(a) for a in await admin_service.list_admins()]


@router.post(
    "", response_model=AdminProfileResponse, status_code=status.HTTP_201_CREATED
)
async def create_admin(
    body: CreateAdminRequest,
    _: AdminDoc = Depends(require_super_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminProfileResponse:
    return AdminProfileResponse.from_doc(await admin_service.create(body))


@router.put("/{admin_id}", response_model=AdminProfileResponse)
async def update_admin(
    admin_id: str,
    body: UpdateAdminRequest,
    _: AdminDoc = Depends(require_super_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> AdminProfileResponse:
    return AdminProfileResponse.from_doc(await admin_service.update(admin_id, body))


@router.delete("/{admin_id}", response_model=MessageResponse)
async def delete_admin(
    admin_id: str,
    actor: AdminDoc = Depends(require_super_admin),
    admin_service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    await admin_service.delete(actor, admin_id)
    return MessageResponse(success=True, message="Admin deleted successfully")
