"""
Prisma Message Repository Implementation.

Implements MessageRepository over the `chat_messages` table (model ChatMessage
in schema.prisma). Messages are only ever inserted; ordering is by created_at
with id as tie-breaker so that a user message always precedes the assistant
reply written after it.

Prisma ChatMessage Model (from schema.prisma):
    model ChatMessage {
        id          Int         @id @default(autoincrement())
        session_id  Int
        sender      String
        content     String
        context     String?
        created_at  DateTime    @default(now())
        session     ChatSession @relation(..., onDelete: Cascade)
    }
"""

import logging

from prisma import Prisma
from prisma.models import ChatMessage as PrismaChatMessage

from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.ports.repositories import MessageRepository, Page, PageRequest
from chat_storage.domain.value_objects.message_id import MessageId
from chat_storage.domain.value_objects.sender_type import SenderType
from chat_storage.domain.value_objects.session_id import SessionId

logger = logging.getLogger(__name__)


class PrismaMessageRepository(MessageRepository):
    """
    Prisma implementation of MessageRepository.

    Handles persistence of ChatMessage entities to PostgreSQL via Prisma.
    """

    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        """
        Initialize repository with Prisma client.

        Args:
            prisma: Connected Prisma client (injected by DI container)
        """
        self._prisma = prisma

    def _to_entity(self, record: PrismaChatMessage) -> ChatMessage:
        """
        Map Prisma record to domain entity.

        Args:
            record: Prisma ChatMessage model instance

        Returns:
            Domain ChatMessage entity with value objects
        """
        return ChatMessage(
            id=MessageId(record.id),
            session_id=SessionId(record.session_id),
            sender=SenderType(record.sender),
            content=record.content,
            created_at=record.created_at,
            context=record.context,
        )

    async def add(self, message: ChatMessage) -> ChatMessage:
        """
        Insert a message.

        Args:
            message: ChatMessage entity without an id

        Returns:
            The stored message with its database id
        """
        record = await self._prisma.chatmessage.create(
            data={
                "session": {"connect": {"id": message.session_id.value}},
                "sender": message.sender.value,
                "content": message.content,
                "context": message.context,
                "created_at": message.created_at,
            }
        )
        logger.debug(f"Inserted message {record.id} into session {record.session_id}")
        return self._to_entity(record)

    async def list_by_session(
        self, session_id: SessionId, page_request: PageRequest
    ) -> Page[ChatMessage]:
        """
        Get one page of a session's messages.

        Args:
            session_id: SessionId value object
            page_request: page, size and created_at sort direction

        Returns:
            Page of ChatMessage entities plus the session's total message count
        """
        direction = page_request.direction.value.lower()
        total = await self.count_by_session(session_id)
        records = await self._prisma.chatmessage.find_many(
            where={"session_id": session_id.value},
            order=[{"created_at": direction}, {"id": direction}],
            skip=page_request.offset,
            take=page_request.size,
        )
        return Page.of([self._to_entity(r) for r in records], page_request, total)

    async def count_by_session(self, session_id: SessionId) -> int:
        return await self._prisma.chatmessage.count(
            where={"session_id": session_id.value}
        )
