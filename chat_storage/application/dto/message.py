"""Message DTOs for API request/response."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.value_objects.sender_type import SenderType


class MessageDTO(BaseModel):
    """DTO for message data returned to clients."""

    id: int
    session_id: int
    sender: SenderType
    content: str
    context: Optional[str] = None
    timestamp: datetime

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "MessageDTO":
        return cls(
            id=message.id.value,
            session_id=message.session_id.value,
            sender=message.sender,
            content=message.content,
            context=message.context,
            timestamp=message.created_at,
        )
