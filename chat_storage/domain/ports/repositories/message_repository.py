"""
Message Repository Port - Interface for message persistence.
Implementation: chat_storage/infrastructure/persistence/prisma_message_repository.py

Messages are append-only: there is no update method.
"""

from abc import ABC, abstractmethod

from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.ports.repositories.pagination import Page, PageRequest
from chat_storage.domain.value_objects.session_id import SessionId


class MessageRepository(ABC):
    @abstractmethod
    async def add(self, message: ChatMessage) -> ChatMessage:
        """Insert a new message and return it with its assigned id and timestamp."""
        ...

    @abstractmethod
    async def list_by_session(
        self, session_id: SessionId, page_request: PageRequest
    ) -> Page[ChatMessage]: ...

    @abstractmethod
    async def count_by_session(self, session_id: SessionId) -> int: ...
