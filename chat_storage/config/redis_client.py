"""
Async Redis Client Factory.

One pooled client serves both the rate limiter scripts and the event stream
publisher. decode_responses=True so script results and stream ids are str.
"""

import logging

import redis.asyncio as redis
from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def create_redis(url: str) -> Redis:
    """Create an async Redis client. No I/O happens until the first command."""
    return redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )


async def ping(client: Redis) -> bool:
    """Test Redis connection, False if unreachable."""
    try:
        return await client.ping()
    except redis.RedisError as e:
        logger.warning(f"[Redis] Ping failed: {e}")
        return False


async def close_redis(client: Redis) -> None:
    """Close Redis client connection. Called on application shutdown."""
    if client:
        await client.aclose()
        logger.info("[Redis] Connection closed")
