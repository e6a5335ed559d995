"""
Input validators: framework-agnostic, pure functions.

Used by request DTO field validators and by the upload store.
"""

from __future__ import annotations

import os
import re
from typing import Optional

import validators as _validators

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".webp"})
_IMAGE_TYPE_PATTERN = re.compile(r"jpeg|jpg|png|gif|webp")


def validate_http_url(url: str) -> bool:
    """Return True if *url* is a well-formed http(s) URL.

    ``localhost`` and bare IP hosts are accepted since portfolio links often
    point at local demos during development.
    """
    if not re.match(r"^https?://.+", url, re.IGNORECASE):
        return False
    return bool(_validators.url(url, simple_host=True))


def slugify_category(name: str) -> str:
    """Lower-case *name* and collapse whitespace runs into single hyphens.

    ``"Programming Languages"`` → ``"programming-languages"``.
    """
    return re.sub(r"\s+", "-", name.strip().lower())


def is_allowed_image(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Return True when both the extension and the MIME type name an image format."""
    if not filename or not content_type:
        return False
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return False
    return bool(_IMAGE_TYPE_PATTERN.search(content_type.lower()))


def search_regex(term: str) -> dict:
    """Build a case-insensitive MongoDB ``$regex`` clause matching *term* literally."""
    return {"$regex": re.escape(term), "$options": "i"}


def exact_ci_regex(value: str) -> dict:
    """Build a ``$regex`` clause matching *value* exactly, ignoring case."""
    return {"$regex": f"^{re.escape(value)}$", "$options": "i"}
