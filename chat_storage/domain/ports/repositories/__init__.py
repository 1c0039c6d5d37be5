"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation (Prisma, SQLAlchemy, etc.)

Infrastructure layer provides implementations.
"""

from chat_storage.domain.ports.repositories.pagination import (
    Page,
    PageRequest,
    SortDirection,
)
from chat_storage.domain.ports.repositories.session_repository import (
    SessionRepository,
    SessionSortField,
)
from chat_storage.domain.ports.repositories.message_repository import MessageRepository

__all__ = [
    "Page",
    "PageRequest",
    "SortDirection",
    "SessionRepository",
    "SessionSortField",
    "MessageRepository",
]
