"""
Message lifecycle events.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time

from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.value_objects.user_id import UserId


class MessageEventType(str, Enum):
    ADDED = "MESSAGE_ADDED"


@dataclass(frozen=True)
class MessageEvent:
    event_type: MessageEventType
    message_id: int
    session_id: int
    user_id: str
    sender: str
    content_length: int
    timestamp: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def entity_id(self) -> int:
        return self.message_id

    @classmethod
    def added(cls, message: ChatMessage, user_id: UserId) -> MessageEvent:
        return cls(
            event_type=MessageEventType.ADDED,
            message_id=message.id.value,
            session_id=message.session_id.value,
            user_id=user_id.value,
            sender=message.sender.value,
            content_length=len(message.content),
        )

    def to_payload(self) -> dict:
        return {
            "eventType": self.event_type.value,
            "messageId": self.message_id,
            "sessionId": self.session_id,
            "userId": self.user_id,
            "sender": self.sender,
            "contentLength": self.content_length,
            "timestamp": self.timestamp,
        }
