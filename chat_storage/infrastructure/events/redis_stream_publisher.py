"""
Domain event publisher backed by Redis streams.

Two logical streams (session events, message events), each split into
partitions "{stream}:{entity_id % partitions}" so that all events for one
entity land in the same partition.

publish() only enqueues. A single background worker drains the queue in FIFO
order, retrying each XADD a bounded number of times; events that still fail
are logged and counted, never raised. A retried XADD may duplicate an entry,
so delivery is at-least-once.

Lifecycle (driven by the DI container):
    publisher = RedisStreamEventPublisher(redis, settings)
    await publisher.start()
    ...
    await publisher.close()  # drains pending events, bounded by shutdown timeout
"""

import asyncio
import contextlib
import json
import logging
from typing import TYPE_CHECKING, Optional

from redis.exceptions import RedisError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from chat_storage.config.settings import EventSettings
from chat_storage.domain.events import DomainEvent, SessionEvent
from chat_storage.domain.ports.services.event_publisher import EventPublisher
from chat_storage.observability.metrics import (
    EventPublishResult,
    increment_event_published,
)

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisStreamEventPublisher(EventPublisher):
    def __init__(self, redis: "Redis", settings: EventSettings):
        self._redis = redis
        self._settings = settings
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=settings.queue_size)
        self._worker: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def base_stream(self, event: DomainEvent) -> str:
        if isinstance(event, SessionEvent):
            return self._settings.session_stream
        return self._settings.message_stream

    def stream_for(self, event: DomainEvent) -> str:
        partition = event.entity_id % self._settings.partitions
        return f"{self.base_stream(event)}:{partition}"

    def publish(self, event: DomainEvent) -> None:
        if self._closed:
            logger.warning(
                f"Publisher closed, dropping {event.event_type.value} "
                f"for entity {event.entity_id}"
            )
            increment_event_published(self.base_stream(event), EventPublishResult.DROPPED)
            return
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.error(
                f"Event queue full ({self._settings.queue_size}), dropping "
                f"{event.event_type.value} for entity {event.entity_id}"
            )
            increment_event_published(self.base_stream(event), EventPublishResult.DROPPED)

    async def start(self) -> None:
        if self._worker is None:
            self._closed = False
            self._worker = asyncio.create_task(self._run(), name="event-publisher")
            logger.info("Event publisher started")

    async def flush(self) -> None:
        """Wait until every queued event has been delivered or given up on."""
        await self._queue.join()

    async def close(self) -> None:
        self._closed = True
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(
                self._queue.join(), timeout=self._settings.shutdown_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Event publisher closing with {self._queue.qsize()} undelivered events"
            )
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        logger.info("Event publisher closed")

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._deliver(event)
            except Exception:
                logger.exception(
                    f"Unexpected error publishing {event.event_type.value} "
                    f"for entity {event.entity_id}"
                )
                increment_event_published(
                    self.base_stream(event), EventPublishResult.FAILED
                )
            finally:
                self._queue.task_done()

    async def _deliver(self, event: DomainEvent) -> None:
        stream = self.stream_for(event)
        fields = {
            "key": str(event.entity_id),
            "event_type": event.event_type.value,
            "payload": json.dumps(event.to_payload()),
        }
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.max_delivery_attempts),
                wait=wait_fixed(self._settings.retry_delay_seconds),
                retry=retry_if_exception_type(RedisError),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    await self._redis.xadd(
                        stream,
                        fields,
                        maxlen=self._settings.stream_maxlen,
                        approximate=True,
                    )
        except RedisError as e:
            logger.error(
                f"Failed to publish {event.event_type.value} for entity "
                f"{event.entity_id} to {stream}: {e}"
            )
            increment_event_published(self.base_stream(event), EventPublishResult.FAILED)
            return

        logger.info(
            f"Event published: {event.event_type.value} for entity "
            f"{event.entity_id} on {stream}"
        )
        increment_event_published(self.base_stream(event), EventPublishResult.DELIVERED)
