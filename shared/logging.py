"""
Logger factory and helpers.

Provides:
- get_logger(): Get a configured logger instance
- hash_ip(): Hash IP addresses for privacy
- mask_email(): Reduce an email address to its domain for log context
"""

from __future__ import annotations

from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from shared.logging_config import hash_ip as _hash_ip
from shared.logging_config import setup_logging

__all__ = [
    "get_logger",
    "hash_ip",
    "mask_email",
    "setup_logging",
]


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("admin_login", admin_id="123")
    """
    return structlog.get_logger(name)


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """Hash *ip_address* in production; ``None`` passes through."""
    if ip_address is None:
        return None
    return _hash_ip(ip_address)


def mask_email(email: Optional[str]) -> str:
    """Return only the domain part of *email* (``"unknown"`` when absent)."""
    if not email or "@" not in email:
        return "unknown"
    return email.rsplit("@", 1)[1]
