"""
Prometheus Metrics Endpoint for the Chat Storage service.

DATA FLOW:
    observability/metrics.py         This file                    Scraper
    ────────────────────────         ─────────                    ───────
    Define & record metrics ──────►  /metrics endpoint ──────────► Prometheus / Alloy

Test with: curl http://localhost:8080/metrics
"""

from fastapi import APIRouter, Response

from chat_storage.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    """Current exchange, completion, rate-limit and event metrics in Prometheus text format."""
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
