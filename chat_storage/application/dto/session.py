"""Session DTOs for API request/response."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from chat_storage.domain.entities.chat_session import ChatSession


@dataclass(frozen=True)
class SessionSummary:
    """A session plus its message count, computed from the messages table."""

    session: ChatSession
    message_count: int


class SessionDTO(BaseModel):
    """DTO for session data returned to clients."""

    id: int
    user_id: str
    session_name: str
    is_favorite: bool
    created_at: datetime
    updated_at: datetime
    message_count: int

    @classmethod
    def from_summary(cls, summary: SessionSummary) -> "SessionDTO":
        session = summary.session
        return cls(
            id=session.id.value,
            user_id=session.user_id.value,
            session_name=session.session_name,
            is_favorite=session.is_favorite,
            created_at=session.created_at,
            updated_at=session.updated_at,
            message_count=summary.message_count,
        )
