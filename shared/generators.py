"""
Random token and filename generators: pure, side-effect-free functions.

All generators use cryptographically secure sources (``secrets`` module).
"""

from __future__ import annotations

import secrets
import time


def generate_reset_token(num_bytes: int = 32) -> str:
    """Generate a cryptographically secure hex token.

    Args:
        num_bytes: Number of random bytes (default 32 → 64 hex characters).
    """
    return secrets.token_hex(num_bytes)


def generate_unique_suffix() -> str:
    """Return a ``<epoch-millis>-<random>`` suffix for stored filenames."""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
