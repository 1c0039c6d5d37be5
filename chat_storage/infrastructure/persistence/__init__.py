"""
Persistence Layer - Database implementations.

Contains Prisma repository implementations for domain ports.
"""

from chat_storage.infrastructure.persistence.prisma_session_repository import (
    PrismaSessionRepository,
)
from chat_storage.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)

__all__ = [
    "PrismaSessionRepository",
    "PrismaMessageRepository",
]
