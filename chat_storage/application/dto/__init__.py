"""
DTOs - Data Transfer Objects

DTOs for transferring data between layers:
- session.py → SessionSummary, SessionDTO
- message.py → MessageDTO
- page.py    → PageDTO

Note: These are different from domain entities.
DTOs are for API input/output, entities are for business logic.
"""

from chat_storage.application.dto.session import SessionDTO, SessionSummary
from chat_storage.application.dto.message import MessageDTO
from chat_storage.application.dto.page import PageDTO

__all__ = [
    "SessionDTO",
    "SessionSummary",
    "MessageDTO",
    "PageDTO",
]
