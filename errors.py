"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to consistent JSON responses.

Request validation failures are reported per field as 400s so that every
rejected input shares the ValidationError shape.

Non-AppError exceptions bubble up as 500s (with Sentry reporting in production).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.logging import get_logger

log = get_logger(__name__)


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class AuthenticationError(AppError):
    status_code = 401
    error_code = "authentication_error"


class InvalidCredentialsError(AppError):
    """Unknown email or wrong password; the two cases share one message."""

    status_code = 401
    error_code = "invalid_credentials"


class AccountInactiveError(AppError):
    status_code = 401
    error_code = "account_inactive"


class AccountLockedError(AppError):
    status_code = 423
    error_code = "account_locked"


class ForbiddenError(AppError):
    status_code = 403
    error_code = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class ConflictError(AppError):
    status_code = 409
    error_code = "conflict"


class TokenInvalidError(AppError):
    status_code = 400
    error_code = "invalid_or_expired_token"


class CurrentPasswordIncorrectError(AppError):
    status_code = 400
    error_code = "current_password_incorrect"


class RateLimitError(AppError):
    status_code = 429
    error_code = "rate_limit_exceeded"


class EmailDeliveryError(AppError):
    status_code = 500
    error_code = "email_delivery_failed"


def _format_validation_errors(exc: RequestValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        # loc is ("body", "email") / ("query", "page") / ("path", "id")
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append(
            {
                "field": ".".join(loc) if loc else None,
                "message": err.get("msg", "invalid value"),
            }
        )
    return details


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Framework-raised errors (unknown route, wrong method) in the AppError shape
        if exc.status_code == 404:
            payload = {"error": f"Route {request.url.path} not found", "code": "not_found"}
        else:
            payload = {"error": str(exc.detail), "code": "http_error"}
        return JSONResponse(
            status_code=exc.status_code, content=payload, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError(
            "Validation failed", details=_format_validation_errors(exc)
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )
