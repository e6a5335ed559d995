"""
Admin authentication: login with lockout, and the password reset flow.

Login outcome is decided in this order: unknown email, locked, inactive,
wrong password, success. Unknown email and wrong password raise the same
InvalidCredentialsError with the same message so callers cannot probe
which addresses exist.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Optional

from config import LockoutSettings
from errors import (
    AccountInactiveError,
    AccountLockedError,
    AuthenticationError,
    CurrentPasswordIncorrectError,
    EmailDeliveryError,
    InvalidCredentialsError,
    NotFoundError,
    TokenInvalidError,
)
from infrastructure.email.protocol import EmailProvider
from repositories.admin_repository import AdminRepository
from repositories.base import as_object_id
from schemas.models.admin import AdminDoc
from services.token_service import TokenService
from shared.crypto import hash_password, hash_token, verify_password
from shared.datetime_utils import ensure_utc, utcnow
from shared.generators import generate_reset_token
from shared.lockout import is_locked
from shared.logging import get_logger, mask_email

log = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

_timing_hash: Optional[str] = None


def _verify_against_dummy(password: str) -> None:
    """Spend one hash verification on unknown emails so they take as long as wrong passwords."""
    global _timing_hash
    if _timing_hash is None:
        _timing_hash = hash_password("timing-equaliser")
    verify_password(password, _timing_hash)


class AuthService:
    def __init__(
        self,
        admin_repo: AdminRepository,
        token_service: TokenService,
        email_provider: EmailProvider,
        lockout: LockoutSettings,
        frontend_url: str,
    ) -> None:
        self._admins = admin_repo
        self._tokens = token_service
        self._email = email_provider
        self._lockout = lockout
        self._frontend_url = frontend_url.rstrip("/")

    @property
    def lock_duration(self) -> timedelta:
        return timedelta(seconds=self._lockout.lock_duration_seconds)

    async def login(self, email: str, password: str) -> tuple[str, AdminDoc]:
        """Authenticate and return ``(access_token, admin)``.

        Raises:
            InvalidCredentialsError: unknown email or wrong password.
            AccountLockedError: lock_until is in the future (attempt not counted).
            AccountInactiveError: the account is deactivated.
        """
        now = utcnow()
        admin = await self._admins.find_by_email(email)
        if admin is None:
            _verify_against_dummy(password)
            log.info("login_failed", reason="unknown_email", email_domain=mask_email(email))
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        if is_locked(admin.lock_until, now):
            log.warning("login_refused_locked", admin_id=str(admin.id))
            raise AccountLockedError(
                "Account is temporarily locked due to too many failed login "
                "attempts. Please try again later."
            )

        if not admin.is_active:
            log.info("login_refused_inactive", admin_id=str(admin.id))
            raise AccountInactiveError("Account is deactivated")

        if not verify_password(password, admin.password_hash):
            await self._record_failure(admin, now)
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        updated = await self._admins.register_successful_login(admin.id, now)
        admin = updated or admin
        token = self._tokens.issue_access_token(admin, now)
        log.info("login_success", admin_id=str(admin.id), role=admin.role)
        return token, admin

    async def _record_failure(self, admin: AdminDoc, now) -> None:
        try:
            updated = await self._admins.register_failed_login(
                admin.id,
                now,
                max_attempts=self._lockout.max_login_attempts,
                lock_duration=self.lock_duration,
            )
        except Exception as e:
            # The caller still gets InvalidCredentials; the count is best-effort
            log.error(
                "login_attempt_update_failed",
                admin_id=str(admin.id),
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        attempts = updated.login_attempts if updated else None
        log.info("login_failed", reason="wrong_password", admin_id=str(admin.id), attempts=attempts)
        if updated is not None and is_locked(updated.lock_until, now):
            log.warning(
                "account_locked",
                admin_id=str(admin.id),
                lock_until=updated.lock_until.isoformat(),
            )

    async def request_password_reset(self, email: str) -> None:
        """Store a reset-token digest and email the raw token as a link.

        Raises:
            NotFoundError: no admin with that email.
            EmailDeliveryError: the email could not be sent; the stored
                token is cleared before raising.
        """
        admin = await self._admins.find_by_email(email)
        if admin is None:
            raise NotFoundError("No admin found with that email")

        raw_token = generate_reset_token()
        expires_at = utcnow() + timedelta(seconds=self._lockout.password_reset_ttl_seconds)
        await self._admins.set_reset_token(admin.id, hash_token(raw_token), expires_at)

        reset_url = f"{self._frontend_url}/reset-password?token={raw_token}"
        try:
            sent = await self._email.send_password_reset_email(
                admin.email, admin.name, reset_url
            )
        except Exception as e:
            await self._admins.clear_reset_token(admin.id)
            log.error(
                "password_reset_email_failed",
                admin_id=str(admin.id),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise EmailDeliveryError("Email could not be sent") from e
        if not sent:
            await self._admins.clear_reset_token(admin.id)
            log.error("password_reset_email_failed", admin_id=str(admin.id))
            raise EmailDeliveryError("Email could not be sent")

        log.info("password_reset_requested", admin_id=str(admin.id))

    async def complete_password_reset(self, raw_token: str, new_password: str) -> AdminDoc:
        """Set a new password for the holder of a live reset token.

        Raises:
            TokenInvalidError: token unknown, expired or already used.
        """
        now = utcnow()
        admin = await self._admins.consume_reset_token(
            hash_token(raw_token),
            now,
            hash_password(new_password),
            now,
        )
        if admin is None:
            log.info("password_reset_rejected")
            raise TokenInvalidError("Invalid or expired token")
        log.info("password_reset_completed", admin_id=str(admin.id))
        return admin

    async def change_password(
        self, admin: AdminDoc, current_password: str, new_password: str
    ) -> None:
        """Replace the password after checking the current one.

        Raises:
            CurrentPasswordIncorrectError: *current_password* does not match.
        """
        if not verify_password(current_password, admin.password_hash):
            raise CurrentPasswordIncorrectError("Current password is incorrect")

        changed = await self._admins.set_password_hash(
            admin.id, hash_password(new_password), utcnow()
        )
        if not changed:
            raise NotFoundError("Admin not found")
        log.info("password_changed", admin_id=str(admin.id))

    async def authenticate_token(self, token: str) -> AdminDoc:
        """Resolve a bearer token to its admin account.

        Raises:
            AuthenticationError: invalid or expired token, deleted or
                inactive account, or a token issued before the last
                password change.
        """
        claims = self._tokens.decode_access_token(token)
        admin_id = as_object_id(claims.get("sub"))
        admin = await self._admins.find_by_id(admin_id) if admin_id else None
        if admin is None:
            raise AuthenticationError("Token is not valid")
        if not admin.is_active:
            raise AuthenticationError("Account is deactivated")
        if admin.password_changed_at is not None:
            # iat has whole-second resolution; compare against the floored change time
            changed_ts = math.floor(ensure_utc(admin.password_changed_at).timestamp())
            if int(claims["iat"]) < changed_ts:
                raise AuthenticationError("Password was changed; please log in again")
        return admin
