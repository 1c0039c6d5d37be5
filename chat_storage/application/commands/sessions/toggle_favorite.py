"""
ToggleFavorite Command - flip the favorite flag of an owned session.

Publishes SESSION_FAVORITED or SESSION_UNFAVORITED depending on the new value.
"""

import logging
from dataclasses import dataclass

from chat_storage.application.common.interfaces import Command, CommandHandler
from chat_storage.application.dto.session import SessionSummary
from chat_storage.application.services.session_guard import SessionGuard
from chat_storage.domain.events import SessionEvent, SessionEventType
from chat_storage.domain.ports.repositories import MessageRepository, SessionRepository
from chat_storage.domain.ports.services import EventPublisher
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleFavoriteCommand(Command[SessionSummary]):
    session_id: SessionId
    user_id: UserId


class ToggleFavoriteHandler(CommandHandler[SessionSummary]):
    def __init__(
        self,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
        event_publisher: EventPublisher,
    ):
        self._session_guard = session_guard
        self._session_repository = session_repository
        self._message_repository = message_repository
        self._event_publisher = event_publisher

    async def execute(self, command: ToggleFavoriteCommand) -> SessionSummary:
        session = await self._session_guard.load_owned(
            command.session_id, command.user_id
        )
        favorite = session.toggle_favorite()
        session = await self._session_repository.save(session)
        logger.info(f"Session {session.id} favorite set to {favorite}")

        event_type = (
            SessionEventType.FAVORITED if favorite else SessionEventType.UNFAVORITED
        )
        self._event_publisher.publish(SessionEvent.of(event_type, session))

        count = await self._message_repository.count_by_session(command.session_id)
        return SessionSummary(session=session, message_count=count)
