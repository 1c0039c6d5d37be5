"""
Dishka DI Container Setup.

- Registers all dependencies (clients, repositories, handlers)
- Maps abstract ports to concrete implementations
- Manages lifecycle: APP-scoped clients are opened on first use and closed
  with the container, REQUEST-scoped objects live for one HTTP request

Flow:
  Container → provides → PrismaSessionRepository → to → AddMessageHandler
                                    ↓
                            uses SessionRepository interface
"""

import logging
from typing import AsyncIterable

import httpx
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from openai import AsyncOpenAI
from prisma import Prisma
from redis.asyncio import Redis

from chat_storage.config.redis_client import close_redis, create_redis
from chat_storage.config.settings import (
    CompletionSettings,
    EventSettings,
    RateLimitSettings,
    get_config,
)
from chat_storage.domain.ports.repositories import MessageRepository, SessionRepository
from chat_storage.domain.ports.services import (
    CompletionClient,
    EventPublisher,
    RateLimiter,
)
from chat_storage.infrastructure.completion import OpenAICompletionClient
from chat_storage.infrastructure.events import RedisStreamEventPublisher
from chat_storage.infrastructure.persistence import (
    PrismaMessageRepository,
    PrismaSessionRepository,
)
from chat_storage.infrastructure.rate_limit import RedisRateLimiter
from chat_storage.setup.ioc.handlers import HandlerProvider

logger = logging.getLogger(__name__)


class SettingsProvider(Provider):
    """Component settings built once from the environment's Config class."""

    scope = Scope.APP

    @provide
    def get_rate_limit_settings(self) -> RateLimitSettings:
        return RateLimitSettings.from_config(get_config())

    @provide
    def get_completion_settings(self) -> CompletionSettings:
        return CompletionSettings.from_config(get_config())

    @provide
    def get_event_settings(self) -> EventSettings:
        return EventSettings.from_config(get_config())


class AppProvider(Provider):
    """
    Application dependency provider.

    Registers all dependencies and their implementations.
    """

    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - Scope.APP = created ONCE, shared across all requests
        - disconnected when the container closes
        """
        prisma = Prisma()
        await prisma.connect()
        logger.info("[Prisma] Connected")
        yield prisma
        await prisma.disconnect()
        logger.info("[Prisma] Disconnected")

    # ==================== REDIS ====================

    @provide(scope=Scope.APP)
    async def get_redis(self) -> AsyncIterable[Redis]:
        client = create_redis(get_config().REDIS_URL)
        yield client
        await close_redis(client)

    # ==================== COMPLETION PROVIDER ====================

    @provide(scope=Scope.APP)
    async def get_openai_client(self) -> AsyncIterable[AsyncOpenAI]:
        cfg = get_config()
        client = AsyncOpenAI(
            api_key=cfg.COMPLETION_API_KEY,
            base_url=cfg.COMPLETION_BASE_URL,
            max_retries=0,  # retries are owned by OpenAICompletionClient
            timeout=httpx.Timeout(
                cfg.COMPLETION_TIMEOUT, connect=cfg.COMPLETION_CONNECT_TIMEOUT
            ),
        )
        yield client
        await client.close()

    # ==================== SERVICES ====================

    @provide(scope=Scope.APP)
    def get_rate_limiter(
        self, redis: Redis, settings: RateLimitSettings
    ) -> RateLimiter:
        return RedisRateLimiter(redis, settings)

    @provide(scope=Scope.APP)
    def get_completion_client(
        self, client: AsyncOpenAI, settings: CompletionSettings
    ) -> CompletionClient:
        return OpenAICompletionClient(client, settings)

    @provide(scope=Scope.APP)
    async def get_event_publisher(
        self, redis: Redis, settings: EventSettings
    ) -> AsyncIterable[EventPublisher]:
        """
        Provide the stream publisher and its background worker.

        close() drains queued events (bounded by the shutdown timeout)
        before Redis itself is closed.
        """
        publisher = RedisStreamEventPublisher(redis, settings)
        await publisher.start()
        yield publisher
        await publisher.close()

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.REQUEST)
    def get_session_repository(self, prisma: Prisma) -> SessionRepository:
        """
        - Return type is ABSTRACT (SessionRepository)
        - Implementation is CONCRETE (PrismaSessionRepository)
        """
        return PrismaSessionRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)


def create_container() -> AsyncContainer:
    return make_async_container(SettingsProvider(), AppProvider(), HandlerProvider())
