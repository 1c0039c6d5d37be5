"""
API Routers - FastAPI endpoint definitions.
"""

from chat_storage.presentation.api.sessions import router as sessions_router
from chat_storage.presentation.api.messages import router as messages_router
from chat_storage.presentation.api.metrics import router as metrics_router

__all__ = [
    "sessions_router",
    "messages_router",
    "metrics_router",
]
