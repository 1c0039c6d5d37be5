"""
Prometheus Metrics for the Chat Storage service.

DATA FLOW:
    This file                  presentation/api/metrics.py         Scraper
    ─────────                  ────────────────────────────         ───────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus / Alloy

METRIC TYPES:
    - Gauge: Value goes up/down (current count, e.g., exchanges in flight)
    - Counter: Value only goes up (total count, e.g., rejected requests)
    - Histogram: Distribution (for percentiles like P95, e.g., latency)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
ACTIVE_EXCHANGES = Gauge(
    "chat_active_exchanges", "Number of message exchanges currently being processed"
)

REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.05, 0.1, 0.5, 1, 2, 5, 10, 30, 60],
)

EXCHANGE_LATENCY = Histogram(
    "chat_exchange_duration_seconds",
    "Duration of one add-message exchange in seconds",
    ["outcome"],
    buckets=[0.5, 1, 2, 5, 10, 20, 30, 60],
)

COMPLETION_OUTCOMES_TOTAL = Counter(
    "chat_completion_outcomes_total",
    "Completion calls by classified outcome",
    ["outcome"],
)

COMPLETION_ATTEMPTS = Histogram(
    "chat_completion_attempts",
    "Provider attempts made per completion call",
    buckets=[1, 2, 3, 5],
)

RATE_LIMIT_REJECTIONS_TOTAL = Counter(
    "chat_rate_limit_rejections_total",
    "Requests rejected by the per-user rate limiter",
)

EVENTS_PUBLISHED_TOTAL = Counter(
    "chat_events_published_total",
    "Domain events by stream and delivery result",
    ["stream", "result"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class EventPublishResult:
    """Result labels for chat_events_published_total metric."""

    DELIVERED = "delivered"
    FAILED = "failed"
    DROPPED = "dropped"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def increment_active_exchanges():
    """Call when an exchange STARTS. Integration point: AddMessageHandler.execute()"""
    ACTIVE_EXCHANGES.inc()


def decrement_active_exchanges():
    """Call when an exchange ENDS (in finally block)."""
    ACTIVE_EXCHANGES.dec()


def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Call to record request latency. Integration point: fastapi_app.py middleware"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def observe_exchange_latency(outcome: str, duration: float):
    EXCHANGE_LATENCY.labels(outcome=outcome).observe(duration)


def increment_completion_outcome(outcome: str):
    COMPLETION_OUTCOMES_TOTAL.labels(outcome=outcome).inc()


def observe_completion_attempts(attempts: int):
    COMPLETION_ATTEMPTS.observe(attempts)


def increment_rate_limit_rejection():
    RATE_LIMIT_REJECTIONS_TOTAL.inc()


def increment_event_published(stream: str, result: str):
    EVENTS_PUBLISHED_TOTAL.labels(stream=stream, result=result).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Called by: presentation/api/metrics.py

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


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
