"""Fixed-window per-client rate limiter backed by Redis.

Each window is one Redis key ``rl:{scope}:{client}:{window}`` counted with
INCR and expired with EXPIRE. Without Redis every request is allowed.
"""

import time
from dataclasses import dataclass
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from shared.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int


class RateLimiter:
    def __init__(self, redis: Optional[aioredis.Redis]) -> None:
        self._redis = redis

    @property
    def enabled(self) -> bool:
        return self._redis is not None

    async def hit(
        self, scope: str, client: str, limit: int, window_seconds: int
    ) -> RateLimitResult:
        if self._redis is None:
            return RateLimitResult(True, limit, limit, 0)

        now = int(time.time())
        window = now // window_seconds
        reset_after = window_seconds - (now % window_seconds)
        key = f"rl:{scope}:{client}:{window}"

        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, window_seconds)
                count, _ = await pipe.execute()
        except RedisError as e:
            # Fail open: the limiter must not take the API down with it
            log.warning("rate_limit_check_failed", scope=scope, error=str(e))
            return RateLimitResult(True, limit, limit, 0)

        remaining = max(limit - int(count), 0)
        return RateLimitResult(int(count) <= limit, limit, remaining, reset_after)
