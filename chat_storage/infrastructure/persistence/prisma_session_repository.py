"""
Prisma Session Repository Implementation.

Implements SessionRepository over the `chat_sessions` table (model ChatSession
in schema.prisma). Ids are autoincrement integers assigned on insert.

Mapping:
- Prisma: id (int) ←→ Domain: id (SessionId)
- Prisma: user_id (str) ←→ Domain: user_id (UserId)
- Other fields map directly
"""

from typing import Optional

from prisma import Prisma
from prisma.models import ChatSession as PrismaChatSession

from chat_storage.domain.entities.chat_session import ChatSession
from chat_storage.domain.exceptions import SessionNotFoundError
from chat_storage.domain.ports.repositories import (
    Page,
    PageRequest,
    SessionRepository,
    SessionSortField,
)
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId


class PrismaSessionRepository(SessionRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaChatSession) -> ChatSession:
        """Map Prisma record to domain entity."""
        return ChatSession(
            id=SessionId(record.id),
            user_id=UserId(record.user_id),
            session_name=record.session_name,
            is_favorite=record.is_favorite,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_owned(
        self, session_id: SessionId, user_id: UserId
    ) -> Optional[ChatSession]:
        record = await self._prisma.chatsession.find_first(
            where={"id": session_id.value, "user_id": user_id.value}
        )
        return self._to_entity(record) if record else None

    async def list_by_user(
        self,
        user_id: UserId,
        page_request: PageRequest,
        sort_by: SessionSortField = SessionSortField.UPDATED_AT,
        favorites_only: bool = False,
    ) -> Page[ChatSession]:
        where = {"user_id": user_id.value}
        if favorites_only:
            where["is_favorite"] = True

        direction = page_request.direction.value.lower()
        total = await self._prisma.chatsession.count(where=where)
        records = await self._prisma.chatsession.find_many(
            where=where,
            order=[{sort_by.value: direction}, {"id": direction}],
            skip=page_request.offset,
            take=page_request.size,
        )
        return Page.of([self._to_entity(r) for r in records], page_request, total)

    async def save(self, session: ChatSession) -> ChatSession:
        """Create when the session has no id yet, otherwise update mutable fields."""
        if session.id is None:
            record = await self._prisma.chatsession.create(
                data={
                    "user_id": session.user_id.value,
                    "session_name": session.session_name,
                    "is_favorite": session.is_favorite,
                    "created_at": session.created_at,
                    "updated_at": session.updated_at,
                }
            )
        else:
            record = await self._prisma.chatsession.update(
                where={"id": session.id.value},
                data={
                    "session_name": session.session_name,
                    "is_favorite": session.is_favorite,
                    "updated_at": session.updated_at,
                },
            )
            if record is None:
                # deleted between load and update
                raise SessionNotFoundError(session.id.value)
        return self._to_entity(record)

    async def delete(self, session_id: SessionId) -> bool:
        """Delete by id; messages go with it (onDelete: Cascade)."""
        record = await self._prisma.chatsession.delete(where={"id": session_id.value})
        return record is not None
