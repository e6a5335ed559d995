"""
Admin account management.

Every accepted plaintext password is hashed exactly once, here or in
AuthService; updates that do not carry a password never touch the hash.
"""

from __future__ import annotations

from typing import Optional

from pymongo.errors import DuplicateKeyError

from config import AdminBootstrapSettings
from errors import ConflictError, NotFoundError, ValidationError
from infrastructure.email.protocol import EmailProvider
from repositories.admin_repository import AdminRepository
from repositories.base import as_object_id
from schemas.dto.requests.auth import (
    CreateAdminRequest,
    UpdateAdminRequest,
    UpdateProfileRequest,
)
from schemas.models.admin import ROLE_SUPER_ADMIN, AdminDoc
from shared.crypto import hash_password
from shared.datetime_utils import utcnow
from shared.logging import get_logger, mask_email

log = get_logger(__name__)


class AdminService:
    def __init__(self, admin_repo: AdminRepository, email_provider: EmailProvider) -> None:
        self._admins = admin_repo
        self._email = email_provider

    async def get(self, admin_id: str) -> AdminDoc:
        oid = as_object_id(admin_id)
        admin = await self._admins.find_by_id(oid) if oid else None
        if admin is None:
            raise NotFoundError("Admin not found")
        return admin

    async def list_admins(self) -> list[AdminDoc]:
        return await self._admins.list_all()

    async def stats(self) -> dict[str, int]:
        return await self._admins.stats()

    async def create(self, request: CreateAdminRequest) -> AdminDoc:
        if await self._admins.email_taken(request.email):
            raise ConflictError("Admin with this email already exists", field="email")

        now = utcnow()
        admin = AdminDoc(
            name=request.name,
            email=request.email,
            password_hash=hash_password(request.password),
            role=request.role,
            created_at=now,
            updated_at=now,
        )
        try:
            admin = await self._admins.insert(admin)
        except DuplicateKeyError as e:
            raise ConflictError(
                "Admin with this email already exists", field="email"
            ) from e

        log.info("admin_created", admin_id=str(admin.id), role=admin.role)

        if not await self._email.send_welcome_email(admin.email, admin.name):
            log.warning("welcome_email_failed", admin_id=str(admin.id))
        return admin

    async def _apply_update(self, admin: AdminDoc, fields: dict) -> AdminDoc:
        if not fields:
            return admin
        email = fields.get("email")
        if email and email != admin.email and await self._admins.email_taken(
            email, exclude_id=admin.id
        ):
            raise ConflictError("Admin with this email already exists", field="email")
        try:
            updated = await self._admins.update_fields(admin.id, fields, utcnow())
        except DuplicateKeyError as e:
            raise ConflictError(
                "Admin with this email already exists", field="email"
            ) from e
        if updated is None:
            raise NotFoundError("Admin not found")
        return updated

    async def update_profile(
        self, admin: AdminDoc, request: UpdateProfileRequest
    ) -> AdminDoc:
        fields = request.model_dump(exclude_unset=True, exclude_none=True)
        updated = await self._apply_update(admin, fields)
        log.info("admin_profile_updated", admin_id=str(admin.id), fields=sorted(fields))
        return updated

    async def update(self, admin_id: str, request: UpdateAdminRequest) -> AdminDoc:
        admin = await self.get(admin_id)
        fields = request.model_dump(exclude_unset=True, exclude_none=True)
        updated = await self._apply_update(admin, fields)
        log.info("admin_updated", admin_id=admin_id, fields=sorted(fields))
        return updated

    async def delete(self, actor: AdminDoc, admin_id: str) -> None:
        admin = await self.get(admin_id)
        if admin.id == actor.id:
            raise ValidationError("You cannot delete your own account")
        await self._admins.delete(admin.id)
        log.info("admin_deleted", admin_id=admin_id, deleted_by=str(actor.id))

    async def ensure_default_admin(
        self, settings: AdminBootstrapSettings
    ) -> Optional[AdminDoc]:
        """Create the configured super-admin when no account has its email."""
        if await self._admins.find_by_email(settings.admin_email) is not None:
            return None

        now = utcnow()
        admin = AdminDoc(
            name=settings.admin_name,
            email=settings.admin_email,
            password_hash=hash_password(settings.admin_password),
            role=ROLE_SUPER_ADMIN,
            created_at=now,
            updated_at=now,
        )
        try:
            admin = await self._admins.insert(admin)
        except DuplicateKeyError:
            # another worker bootstrapped it first
            return None
        log.info("default_admin_created", email_domain=mask_email(admin.email))
        return admin
