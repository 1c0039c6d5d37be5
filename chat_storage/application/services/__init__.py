"""Application services shared by several handlers."""

from chat_storage.application.services.session_guard import SessionGuard

__all__ = ["SessionGuard"]
