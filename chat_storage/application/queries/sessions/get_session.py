"""Get Session Query."""

from dataclasses import dataclass

from chat_storage.application.common.interfaces import Query, QueryHandler
from chat_storage.application.dto.session import SessionSummary
from chat_storage.application.services.session_guard import SessionGuard
from chat_storage.domain.ports.repositories import MessageRepository
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetSessionQuery(Query[SessionSummary]):
    session_id: SessionId
    user_id: UserId


class GetSessionHandler(QueryHandler[SessionSummary]):
    def __init__(
        self, session_guard: SessionGuard, message_repository: MessageRepository
    ):
        self._session_guard = session_guard
        self._message_repository = message_repository

    async def execute(self, query: GetSessionQuery) -> SessionSummary:
        session = await self._session_guard.load_owned(query.session_id, query.user_id)
        count = await self._message_repository.count_by_session(query.session_id)
        return SessionSummary(session=session, message_count=count)
