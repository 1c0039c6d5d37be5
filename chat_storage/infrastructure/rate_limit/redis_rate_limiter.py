"""
Redis fixed-window rate limiter.

One counter per user under "{prefix}{user_id}". The read, compare, increment
and first-request expiry all run inside a single Lua script, so concurrent
requests for the same user cannot push the count past the ceiling.
"""

import logging
from typing import TYPE_CHECKING

from chat_storage.config.settings import RateLimitSettings
from chat_storage.domain.exceptions import RateLimitExceededError
from chat_storage.domain.ports.services.rate_limiter import RateLimiter
from chat_storage.domain.value_objects.user_id import UserId
from chat_storage.observability.metrics import increment_rate_limit_rejection

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

# KEYS[1] = counter key, ARGV[1] = ceiling, ARGV[2] = window seconds.
# Returns the post-increment count, or -1 when the request is rejected.
CHECK_AND_INCREMENT_SCRIPT = """
local current = tonumber(redis.call('GET', KEYS[1]) or '0')
if current >= tonumber(ARGV[1]) then
    return -1
end
current = redis.call('INCR', KEYS[1])
if current == 1 then
    redis.call('EXPIRE', KEYS[1], tonumber(ARGV[2]))
end
return current
"""

REJECTED = -1


class RedisRateLimiter(RateLimiter):
    def __init__(self, redis: "Redis", settings: RateLimitSettings):
        self._redis = redis
        self._settings = settings
        self._script = redis.register_script(CHECK_AND_INCREMENT_SCRIPT)

    def _key(self, user_id: UserId) -> str:
        return f"{self._settings.key_prefix}{user_id.value}"

    async def check(self, user_id: UserId) -> None:
        count = int(
            await self._script(
                keys=[self._key(user_id)],
                args=[self._settings.max_requests, self._settings.window_seconds],
            )
        )
        if count == REJECTED:
            logger.warning(f"Rate limit exceeded for user: {user_id}")
            increment_rate_limit_rejection()
            raise RateLimitExceededError(
                self._settings.max_requests, self._settings.window_seconds
            )
        if count == 1:
            logger.debug(f"Rate limit initialized for user: {user_id}")
        else:
            logger.debug(f"Rate limit count for user {user_id}: {count}")
