"""
DOMAIN EVENTS - Facts about sessions and messages published to downstream
consumers.

One frozen dataclass per stream, tagged by an event type enum. Delivery is
at-least-once, so consumers must tolerate duplicates.
"""

from typing import Union

from chat_storage.domain.events.session_event import SessionEvent, SessionEventType
from chat_storage.domain.events.message_event import MessageEvent, MessageEventType

DomainEvent = Union[SessionEvent, MessageEvent]

__all__ = [
    "DomainEvent",
    "SessionEvent",
    "SessionEventType",
    "MessageEvent",
    "MessageEventType",
]
