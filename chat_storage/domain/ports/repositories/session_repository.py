"""
Session Repository Port - Interface for session persistence.
Implementation: chat_storage/infrastructure/persistence/prisma_session_repository.py
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from chat_storage.domain.entities.chat_session import ChatSession
from chat_storage.domain.ports.repositories.pagination import Page, PageRequest
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId


class SessionSortField(str, Enum):
    UPDATED_AT = "updated_at"
    CREATED_AT = "created_at"
    SESSION_NAME = "session_name"


class SessionRepository(ABC):
    @abstractmethod
    async def get_owned(
        self, session_id: SessionId, user_id: UserId
    ) -> Optional[ChatSession]:
        """Return the session only when it exists and belongs to user_id."""
        ...

    @abstractmethod
    async def list_by_user(
        self,
        user_id: UserId,
        page_request: PageRequest,
        sort_by: SessionSortField = SessionSortField.UPDATED_AT,
        favorites_only: bool = False,
    ) -> Page[ChatSession]: ...

    @abstractmethod
    async def save(self, session: ChatSession) -> ChatSession:
        """Insert when session.id is None, else update. Returns the stored entity."""
        ...

    @abstractmethod
    async def delete(self, session_id: SessionId) -> bool:
        """Delete the session and, by cascade, its messages."""
        ...
