"""Unit tests for the account lockout state machine (shared.lockout)."""

from datetime import datetime, timedelta, timezone

import pytest

from shared.lockout import (
    DEFAULT_LOCK_DURATION,
    DEFAULT_MAX_ATTEMPTS,
    LockState,
    is_locked,
    lock_expired,
    next_failure_state,
    success_state,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _fail(state: LockState, times: int, now: datetime = NOW) -> LockState:
    for _ in range(times):
        state = next_failure_state(state, now)
    return state


class TestIsLocked:
    def test_none_is_unlocked(self):
        assert is_locked(None, NOW) is False

    def test_future_is_locked(self):
        assert is_locked(NOW + timedelta(seconds=1), NOW) is True

    def test_past_is_unlocked(self):
        assert is_locked(NOW - timedelta(seconds=1), NOW) is False

    def test_naive_lock_compared_as_utc(self):
        naive = (NOW + timedelta(minutes=5)).replace(tzinfo=None)
        assert is_locked(naive, NOW) is True


def test_lock_expired():
    assert lock_expired(None, NOW) is False
    assert lock_expired(NOW - timedelta(minutes=1), NOW) is True
    assert lock_expired(NOW + timedelta(minutes=1), NOW) is False


class TestNextFailureState:
    def test_counts_up_below_threshold(self):
        state = _fail(LockState(), 4)
        assert state == LockState(login_attempts=4, lock_until=None)

    def test_fifth_failure_locks_for_two_hours(self):
        state = _fail(LockState(), DEFAULT_MAX_ATTEMPTS)
        assert state.login_attempts == 5
        assert state.lock_until == NOW + DEFAULT_LOCK_DURATION
        assert DEFAULT_LOCK_DURATION == timedelta(hours=2)

    def test_four_prior_failures_plus_one_locks(self):
        state = next_failure_state(LockState(login_attempts=4), NOW)
        assert is_locked(state.lock_until, NOW)

    def test_failure_while_locked_does_not_extend_lock(self):
        until = NOW + timedelta(hours=1)
        state = next_failure_state(LockState(login_attempts=5, lock_until=until), NOW)
        assert state.lock_until == until
        assert state.login_attempts == 6

    def test_failure_after_expiry_restarts_at_one(self):
        expired = LockState(login_attempts=5, lock_until=NOW - timedelta(seconds=1))
        assert next_failure_state(expired, NOW) == LockState(login_attempts=1)

    def test_expiry_then_threshold_locks_again(self):
        later = NOW + DEFAULT_LOCK_DURATION + timedelta(seconds=1)
        state = _fail(LockState(), 5)
        state = _fail(state, 5, now=later)
        assert state.login_attempts == 5
        assert state.lock_until == later + DEFAULT_LOCK_DURATION

    @pytest.mark.parametrize("max_attempts", [1, 3, 10])
    def test_custom_threshold(self, max_attempts):
        state = _fail(LockState(), max_attempts - 1)
        assert state.lock_until is None
        state = next_failure_state(state, NOW, max_attempts=max_attempts)
        assert state.lock_until is not None

    def test_custom_duration(self):
        state = next_failure_state(
            LockState(login_attempts=4), NOW, lock_duration=timedelta(minutes=15)
        )
        assert state.lock_until == NOW + timedelta(minutes=15)


def test_success_state_resets():
    assert success_state() == LockState(login_attempts=0, lock_until=None)
