"""
Shared test fixtures.

InMemoryAdminRepository mirrors AdminRepository's contract on a dict so the
auth flows (lockout, reset tokens, password changes) can be exercised
without MongoDB. Its failure counter goes through shared.lockout, the same
transition the aggregation pipeline encodes.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest
from argon2 import PasswordHasher
from bson import ObjectId

import shared.crypto
from config import JWTSettings, LockoutSettings
from schemas.models.admin import ROLE_ADMIN, AdminDoc
from shared.crypto import hash_password
from shared.lockout import LockState, next_failure_state


@pytest.fixture(autouse=True)
def fast_password_hasher(monkeypatch):
    """Cheap argon2 parameters; the default cost makes suites crawl."""
    monkeypatch.setattr(
        shared.crypto,
        "_password_hasher",
        PasswordHasher(time_cost=1, memory_cost=8, parallelism=1),
    )


class InMemoryAdminRepository:
    """Dict-backed stand-in for repositories.admin_repository.AdminRepository.

    Reads return a snapshot taken before yielding to the event loop, so
    concurrent callers see stale state exactly as they would against a
    real database. Writes apply without yielding, which makes each one atomic.
    """

    def __init__(self) -> None:
        self.docs: dict[ObjectId, AdminDoc] = {}
        self.fail_failed_login_update = False

    def add(self, admin: AdminDoc) -> AdminDoc:
        if admin.id is None:
            admin = admin.model_copy(update={"id": ObjectId()})
        self.docs[admin.id] = admin
        return admin

    def _update(self, admin_id: ObjectId, **fields: Any) -> Optional[AdminDoc]:
        admin = self.docs.get(admin_id)
        if admin is None:
            return None
        admin = admin.model_copy(update=fields)
        self.docs[admin_id] = admin
        return admin

    async def find_by_id(self, admin_id):
        snapshot = self.docs.get(admin_id)
        await asyncio.sleep(0)
        return snapshot

    async def find_by_email(self, email):
        snapshot = next((a for a in self.docs.values() if a.email == email), None)
        await asyncio.sleep(0)
        return snapshot

    async def email_taken(self, email, exclude_id=None):
        return any(
            a.email == email and a.id != exclude_id for a in self.docs.values()
        )

    async def list_all(self):
        return list(self.docs.values())

    async def insert(self, admin):
        return self.add(admin)

    async def update_fields(self, admin_id, fields, now):
        return self._update(admin_id, updated_at=now, **fields)

    async def delete(self, admin_id):
        return self.docs.pop(admin_id, None) is not None

    async def register_failed_login(self, admin_id, now, *, max_attempts, lock_duration):
        if self.fail_failed_login_update:
            raise RuntimeError("database unavailable")
        admin = self.docs.get(admin_id)
        if admin is None:
            return None
        state = next_failure_state(
            LockState(admin.login_attempts, admin.lock_until),
            now,
            max_attempts=max_attempts,
            lock_duration=lock_duration,
        )
        return self._update(
            admin_id,
            login_attempts=state.login_attempts,
            lock_until=state.lock_until,
            updated_at=now,
        )

    async def register_successful_login(self, admin_id, now):
        return self._update(
            admin_id, login_attempts=0, lock_until=None, last_login=now, updated_at=now
        )

    async def set_password_hash(self, admin_id, password_hash, changed_at):
        return (
            self._update(
                admin_id, password_hash=password_hash, password_changed_at=changed_at
            )
            is not None
        )

    async def set_reset_token(self, admin_id, token_digest, expires_at):
        self._update(
            admin_id,
            password_reset_token=token_digest,
            password_reset_expires=expires_at,
        )

    async def clear_reset_token(self, admin_id):
        self._update(admin_id, password_reset_token=None, password_reset_expires=None)

    async def consume_reset_token(self, token_digest, now, password_hash, changed_at):
        for admin in self.docs.values():
            if (
                admin.password_reset_token == token_digest
                and admin.password_reset_expires is not None
                and admin.password_reset_expires > now
            ):
                return self._update(
                    admin.id,
                    password_hash=password_hash,
                    password_changed_at=changed_at,
                    password_reset_token=None,
                    password_reset_expires=None,
                    updated_at=now,
                )
        return None

    async def stats(self):
        admins = list(self.docs.values())
        return {
            "total": len(admins),
            "active": sum(a.is_active for a in admins),
            "super_admins": sum(a.role != ROLE_ADMIN for a in admins),
            "admins": sum(a.role == ROLE_ADMIN for a in admins),
        }


class RecordingEmailProvider:
    """EmailProvider that records calls and returns a configurable result."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[tuple[str, tuple]] = []

    async def _record(self, kind: str, *args) -> bool:
        self.sent.append((kind, args))
        return self.result

    async def send_password_reset_email(self, email, user_name, reset_url):
        return await self._record("password_reset", email, user_name, reset_url)

    async def send_welcome_email(self, email, user_name):
        return await self._record("welcome", email, user_name)

    async def send_contact_notification(self, contact):
        return await self._record("contact_notification", contact)

    async def send_contact_confirmation(self, contact):
        return await self._record("contact_confirmation", contact)


def _make_admin(
    email: str = "admin@example.com",
    password: str = "secret123",
    **overrides: Any,
) -> AdminDoc:
    fields: dict[str, Any] = dict(
        id=ObjectId(),
        name="Admin",
        email=email,
        password_hash=hash_password(password),
        role=ROLE_ADMIN,
    )
    fields.update(overrides)
    return AdminDoc(**fields)


@pytest.fixture
def make_admin():
    """Factory for AdminDoc instances with a hashed password."""
    return _make_admin


@pytest.fixture
def admin_repo() -> InMemoryAdminRepository:
    return InMemoryAdminRepository()


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    return RecordingEmailProvider()


@pytest.fixture
def jwt_settings() -> JWTSettings:
    return JWTSettings(jwt_secret="test-secret-key-with-enough-length-1234")


@pytest.fixture
def lockout_settings() -> LockoutSettings:
    return LockoutSettings()

