"""
Request logging middleware and per-request log context.

Provides:
- Request ID generation for correlation (echoed in X-Request-ID)
- Request/response logging with timing
- request_id / ip_hash bound into structlog contextvars so every log line
  emitted while handling the request carries them
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request

from shared.ip_utils import get_client_ip
from shared.logging import get_logger, hash_ip

log = get_logger("portfolio.request")


def generate_request_id() -> str:
    """Generate a unique request ID for correlation."""
    return f"req_{uuid.uuid4().hex[:12]}"


def log_request_end(method: str, path: str, status_code: int, duration_ms: int) -> None:
    """Log the end of a request with timing and status."""
    if status_code >= 500:
        log_fn = log.error
    elif status_code >= 400:
        log_fn = log.warning
    else:
        log_fn = log.info

    log_fn(
        "request_completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def setup_logging_middleware(app: FastAPI) -> None:
    """Register the request logging middleware on *app*."""

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        start = time.perf_counter()
        request_id = generate_request_id()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            ip_hash=hash_ip(get_client_ip(request) or None),
        )
        log.debug("request_started", method=request.method, path=request.url.path)

        response = await call_next(request)

        duration_ms = int((time.perf_counter() - start) * 1000)
        log_request_end(request.method, request.url.path, response.status_code, duration_ms)
        response.headers["X-Request-ID"] = request_id
        structlog.contextvars.clear_contextvars()
        return response
