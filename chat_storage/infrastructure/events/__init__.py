from chat_storage.infrastructure.events.redis_stream_publisher import (
    RedisStreamEventPublisher,
)

__all__ = ["RedisStreamEventPublisher"]
