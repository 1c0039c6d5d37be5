"""
SERVICE PORTS - Interfaces for external services the exchange depends on.
"""

from chat_storage.domain.ports.services.rate_limiter import RateLimiter
from chat_storage.domain.ports.services.completion_client import (
    CompletionClient,
    CompletionOutcome,
    CompletionResult,
)
from chat_storage.domain.ports.services.event_publisher import EventPublisher

__all__ = [
    "RateLimiter",
    "CompletionClient",
    "CompletionOutcome",
    "CompletionResult",
    "EventPublisher",
]
