"""
RenameSession Command - change the display name of an owned session.
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
class RenameSessionCommand(Command[SessionSummary]):
    session_id: SessionId
    user_id: UserId
    session_name: str


class RenameSessionHandler(CommandHandler[SessionSummary]):
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

    async def execute(self, command: RenameSessionCommand) -> SessionSummary:
        session = await self._session_guard.load_owned(
            command.session_id, command.user_id
        )
        session.rename(command.session_name)
        session = await self._session_repository.save(session)
        logger.info(f"Renamed session {session.id} to '{session.session_name}'")
        self._event_publisher.publish(SessionEvent.of(SessionEventType.RENAMED, session))

        count = await self._message_repository.count_by_session(command.session_id)
        return SessionSummary(session=session, message_count=count)
