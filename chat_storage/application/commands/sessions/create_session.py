"""
CreateSession Command - open a new, empty chat session for the caller.
"""

import logging
from dataclasses import dataclass

from chat_storage.application.common.interfaces import Command, CommandHandler
from chat_storage.application.dto.session import SessionSummary
from chat_storage.domain.entities.chat_session import ChatSession
from chat_storage.domain.events import SessionEvent, SessionEventType
from chat_storage.domain.ports.repositories import SessionRepository
from chat_storage.domain.ports.services import EventPublisher
from chat_storage.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateSessionCommand(Command[SessionSummary]):
    user_id: UserId
    session_name: str


class CreateSessionHandler(CommandHandler[SessionSummary]):
    def __init__(
        self, session_repository: SessionRepository, event_publisher: EventPublisher
    ):
        self._session_repository = session_repository
        self._event_publisher = event_publisher

    async def execute(self, command: CreateSessionCommand) -> SessionSummary:
        session = ChatSession.create(
            user_id=command.user_id, session_name=command.session_name
        )
        session = await self._session_repository.save(session)
        logger.info(f"Created session {session.id} for user: {command.user_id}")
        self._event_publisher.publish(SessionEvent.of(SessionEventType.CREATED, session))
        return SessionSummary(session=session, message_count=0)
