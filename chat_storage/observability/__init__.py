"""Observability package for the Chat Storage service."""

from chat_storage.observability.metrics import (
    increment_active_exchanges,
    decrement_active_exchanges,
    observe_request_latency,
    observe_exchange_latency,
    increment_completion_outcome,
    observe_completion_attempts,
    increment_rate_limit_rejection,
    increment_event_published,
    get_metrics_content,
    EventPublishResult,
)

__all__ = [
    "increment_active_exchanges",
    "decrement_active_exchanges",
    "observe_request_latency",
    "observe_exchange_latency",
    "increment_completion_outcome",
    "observe_completion_attempts",
    "increment_rate_limit_rejection",
    "increment_event_published",
    "get_metrics_content",
    "EventPublishResult",
]
