"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from chat_storage.domain.value_objects.user_id import UserId
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.message_id import MessageId
from chat_storage.domain.value_objects.sender_type import SenderType

__all__ = [
    "UserId",
    "SessionId",
    "MessageId",
    "SenderType",
]
