"""
Rate Limiter Port - per-user fixed-window request ceiling.
Implementation: chat_storage/infrastructure/rate_limit/redis_rate_limiter.py
"""

from abc import ABC, abstractmethod

from chat_storage.domain.value_objects.user_id import UserId


class RateLimiter(ABC):
    @abstractmethod
    async def check(self, user_id: UserId) -> None:
        """
        Count one request for user_id in the current window.

        Raises:
            RateLimitExceededError: the ceiling was already reached in this window
        """
        ...
