"""List Sessions Query."""

from dataclasses import dataclass

from chat_storage.application.common.interfaces import Query, QueryHandler
from chat_storage.application.dto.session import SessionSummary
from chat_storage.domain.ports.repositories import (
    MessageRepository,
    Page,
    PageRequest,
    SessionRepository,
    SessionSortField,
)
from chat_storage.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ListSessionsQuery(Query[Page[SessionSummary]]):
    user_id: UserId
    page_request: PageRequest
    sort_by: SessionSortField = SessionSortField.UPDATED_AT
    favorites_only: bool = False


class ListSessionsHandler(QueryHandler[Page[SessionSummary]]):
    def __init__(
        self,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
    ):
        self._session_repository = session_repository
        self._message_repository = message_repository

    async def execute(self, query: ListSessionsQuery) -> Page[SessionSummary]:
        page = await self._session_repository.list_by_user(
            query.user_id,
            query.page_request,
            sort_by=query.sort_by,
            favorites_only=query.favorites_only,
        )
        summaries = [
            SessionSummary(
                session=session,
                message_count=await self._message_repository.count_by_session(
                    session.id
                ),
            )
            for session in page.items
        ]
        return Page.of(summaries, query.page_request, page.total_items)
