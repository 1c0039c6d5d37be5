"""
Event Publisher Port - fire-and-forget emission of domain events.
Implementation: chat_storage/infrastructure/events/redis_stream_publisher.py
"""

from abc import ABC, abstractmethod

from chat_storage.domain.events import DomainEvent


class EventPublisher(ABC):
    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """
        Hand the event off for delivery and return immediately.

        Must not block on the broker and must not raise on delivery failure.
        """
        ...
