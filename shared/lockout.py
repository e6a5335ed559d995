"""
Account lockout state machine: pure functions over the two persisted fields.

States:
    Unlocked(n)    lock_until is None or already in the past
    Locked(until)  lock_until is in the future

Transitions:
    Unlocked(n)     --failure--> Unlocked(n + 1), or Locked(now + duration)
                                 once n + 1 reaches the threshold
    Locked(until)   --failure--> refused, not counted
    expired lock    --failure--> Unlocked(1)  (stale count is discarded)
    any             --success--> Unlocked(0)

The repository applies the same transition atomically inside MongoDB
(see repositories.admin_repository.build_failed_login_pipeline); these
functions are the reference implementation used by the service and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from shared.datetime_utils import ensure_utc

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_LOCK_DURATION = timedelta(hours=2)


@dataclass(frozen=True)
class LockState:
    login_attempts: int = 0
    lock_until: Optional[datetime] = None


def is_locked(lock_until: Optional[datetime], now: datetime) -> bool:
    """True when *lock_until* is set and still in the future."""
    lock_until = ensure_utc(lock_until)
    return lock_until is not None and lock_until > ensure_utc(now)


def lock_expired(lock_until: Optional[datetime], now: datetime) -> bool:
    """True when a lock was recorded but *now* has passed it."""
    lock_until = ensure_utc(lock_until)
    return lock_until is not None and lock_until <= ensure_utc(now)


def next_failure_state(
    state: LockState,
    now: datetime,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    lock_duration: timedelta = DEFAULT_LOCK_DURATION,
) -> LockState:
    """Return the state after one more failed login at *now*."""
    if lock_expired(state.lock_until, now):
        return LockState(login_attempts=1, lock_until=None)

    attempts = state.login_attempts + 1
    lock_until = state.lock_until
    if attempts >= max_attempts and not is_locked(lock_until, now):
        lock_until = ensure_utc(now) + lock_duration
    return LockState(login_attempts=attempts, lock_until=lock_until)


def success_state() -> LockState:
    """State after a successful login."""
    return LockState(login_attempts=0, lock_until=None)
