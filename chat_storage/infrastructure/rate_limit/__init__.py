from chat_storage.infrastructure.rate_limit.redis_rate_limiter import RedisRateLimiter

__all__ = ["RedisRateLimiter"]
