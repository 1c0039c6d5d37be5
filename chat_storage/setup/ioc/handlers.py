"""
Use-case handler wiring.

Kept apart from container.py so the handlers can be wired against any set
of port implementations without importing the Prisma client.
"""

from dishka import Provider, Scope, provide

from chat_storage.application.commands.chat import AddMessageHandler
from chat_storage.application.commands.sessions import (
    CreateSessionHandler,
    DeleteSessionHandler,
    RenameSessionHandler,
    ToggleFavoriteHandler,
)
from chat_storage.application.queries.messages import ListMessagesHandler
from chat_storage.application.queries.sessions import (
    GetSessionHandler,
    ListSessionsHandler,
)
from chat_storage.application.services import SessionGuard
from chat_storage.domain.ports.repositories import MessageRepository, SessionRepository
from chat_storage.domain.ports.services import (
    CompletionClient,
    EventPublisher,
    RateLimiter,
)


class HandlerProvider(Provider):
    """Use-case handlers; dependencies are wired from the port types."""

    scope = Scope.REQUEST

    @provide
    def get_session_guard(self, session_repository: SessionRepository) -> SessionGuard:
        return SessionGuard(session_repository)

    @provide
    def get_add_message_handler(
        self,
        rate_limiter: RateLimiter,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
        completion_client: CompletionClient,
        event_publisher: EventPublisher,
    ) -> AddMessageHandler:
        return AddMessageHandler(
            rate_limiter=rate_limiter,
            session_guard=session_guard,
            session_repository=session_repository,
            message_repository=message_repository,
            completion_client=completion_client,
            event_publisher=event_publisher,
        )

    @provide
    def get_create_session_handler(
        self, session_repository: SessionRepository, event_publisher: EventPublisher
    ) -> CreateSessionHandler:
        return CreateSessionHandler(session_repository, event_publisher)

    @provide
    def get_rename_session_handler(
        self,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
        event_publisher: EventPublisher,
    ) -> RenameSessionHandler:
        return RenameSessionHandler(
            session_guard, session_repository, message_repository, event_publisher
        )

    @provide
    def get_toggle_favorite_handler(
        self,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
        event_publisher: EventPublisher,
    ) -> ToggleFavoriteHandler:
        return ToggleFavoriteHandler(
            session_guard, session_repository, message_repository, event_publisher
        )

    @provide
    def get_delete_session_handler(
        self,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        event_publisher: EventPublisher,
    ) -> DeleteSessionHandler:
        return DeleteSessionHandler(session_guard, session_repository, event_publisher)

    @provide
    def get_list_sessions_handler(
        self,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
    ) -> ListSessionsHandler:
        return ListSessionsHandler(session_repository, message_repository)

    @provide
    def get_get_session_handler(
        self, session_guard: SessionGuard, message_repository: MessageRepository
    ) -> GetSessionHandler:
        return GetSessionHandler(session_guard, message_repository)

    @provide
    def get_list_messages_handler(
        self, session_guard: SessionGuard, message_repository: MessageRepository
    ) -> ListMessagesHandler:
        return ListMessagesHandler(session_guard, message_repository)

