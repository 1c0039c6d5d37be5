"""
List Messages Query - paged history of one session, oldest first by default.
"""

from dataclasses import dataclass

from chat_storage.application.common.interfaces import Query, QueryHandler
from chat_storage.application.services.session_guard import SessionGuard
from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.ports.repositories import MessageRepository, Page, PageRequest
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListMessagesQuery(Query[Page[ChatMessage]]):
    session_id: SessionId
    user_id: UserId
    page_request: PageRequest


class ListMessagesHandler(QueryHandler[Page[ChatMessage]]):
    def __init__(
        self, session_guard: SessionGuard, message_repository: MessageRepository
    ):
        self._session_guard = session_guard
        self._message_repository = message_repository

    async def execute(self, query: ListMessagesQuery) -> Page[ChatMessage]:
        await self._session_guard.load_owned(query.session_id, query.user_id)
        return await self._message_repository.list_by_session(
            query.session_id, query.page_request
        )
