"""
Session lifecycle events.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time

from chat_storage.domain.entities.chat_session import ChatSession


class SessionEventType(str, Enum):
    CREATED = "SESSION_CREATED"
    RENAMED = "SESSION_RENAMED"
    FAVORITED = "SESSION_FAVORITED"
    UNFAVORITED = "SESSION_UNFAVORITED"
    DELETED = "SESSION_DELETED"
    UPDATED = "SESSION_UPDATED"  # last-updated timestamp advanced by an exchange


@dataclass(frozen=True)
class SessionEvent:
    event_type: SessionEventType
    session_id: int
    user_id: str
    session_name: str
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def entity_id(self) -> int:
        return self.session_id

    @classmethod
    def of(cls, event_type: SessionEventType, session: ChatSession) -> SessionEvent:
        return cls(
            event_type=event_type,
            session_id=session.id.value,
            user_id=session.user_id.value,
            session_name=session.session_name,
        )

    def to_payload(self) -> dict:
        return {
            "eventType": self.event_type.value,
            "sessionId": self.session_id,
            "userId": self.user_id,
            "sessionName": self.session_name,
            "timestamp": self.timestamp,
        }
