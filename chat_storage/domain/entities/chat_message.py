"""
ChatMessage Entity - A single message in a chat session.

Messages are written once by the exchange pipeline and never updated.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from chat_storage.domain.exceptions.validation_error import DomainValidationError
from chat_storage.domain.value_objects.message_id import MessageId
from chat_storage.domain.value_objects.sender_type import SenderType
from chat_storage.domain.value_objects.session_id import SessionId


@dataclass(frozen=True)
class ChatMessage:
    id: Optional[MessageId]  # None until the store assigns one
    session_id: SessionId
    sender: SenderType
    content: str
    created_at: datetime
    context: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.sender, SenderType):
            raise ValueError(f"Invalid sender: {self.sender}")
        if self.content is None or not self.content.strip():
            raise DomainValidationError("Content is required")

    @classmethod
    def create(
        cls,
        session_id: SessionId,
        sender: SenderType,
        content: str,
        context: Optional[str] = None,
    ) -> ChatMessage:
        """Factory method for a new, not yet persisted message."""
        return cls(
            id=None,
            session_id=session_id,
            sender=sender,
            content=content,
            created_at=datetime.now(timezone.utc),
            context=context,
        )
