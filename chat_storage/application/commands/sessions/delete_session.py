"""
DeleteSession Command - remove an owned session and all of its messages.
"""

import logging
from dataclasses import dataclass

from chat_storage.application.common.interfaces import Command, CommandHandler
from chat_storage.application.services.session_guard import SessionGuard
from chat_storage.domain.events import SessionEvent, SessionEventType
from chat_storage.domain.exceptions import SessionNotFoundError
from chat_storage.domain.ports.repositories import SessionRepository
from chat_storage.domain.ports.services import EventPublisher
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteSessionCommand(Command[None]):
    session_id: SessionId
    user_id: UserId


class DeleteSessionHandler(CommandHandler[None]):
    def __init__(
        self,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        event_publisher: EventPublisher,
    ):
        self._session_guard = session_guard
        self._session_repository = session_repository
        self._event_publisher = event_publisher

    async def execute(self, command: DeleteSessionCommand) -> None:
        session = await self._session_guard.load_owned(
            command.session_id, command.user_id
        )
        # a concurrent delete may have won the race
        if not await self._session_repository.delete(command.session_id):
            raise SessionNotFoundError(command.session_id.value)
        logger.info(f"Deleted session {command.session_id} for user: {command.user_id}")
        self._event_publisher.publish(SessionEvent.of(SessionEventType.DELETED, session))
