"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from chat_storage.domain.entities.chat_session import ChatSession
from chat_storage.domain.entities.chat_message import ChatMessage

__all__ = [
    "ChatSession",
    "ChatMessage",
]
