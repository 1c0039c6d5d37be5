"""
SessionGuard - loads a session only for its owner.

A session that does not exist and a session owned by someone else produce
the same SessionNotFoundError, so callers cannot probe for valid ids.
"""

import logging

from chat_storage.domain.entities.chat_session import ChatSession
from chat_storage.domain.exceptions import SessionNotFoundError
from chat_storage.domain.ports.repositories import SessionRepository
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class SessionGuard:
    def __init__(self, session_repository: SessionRepository):
        self._session_repository = session_repository

    async def load_owned(self, session_id: SessionId, user_id: UserId) -> ChatSession:
        session = await self._session_repository.get_owned(session_id, user_id)
        if session is None:
            logger.info(f"Session {session_id} not found for user: {user_id}")
            raise SessionNotFoundError(session_id.value)
        return session
