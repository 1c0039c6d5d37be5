"""
DOMAIN LAYER - Sessions, messages and the rules around them

This layer contains:
- Entities: ChatSession, ChatMessage
- Value Objects: SessionId, MessageId, UserId, SenderType
- Events: SessionEvent, MessageEvent
- Ports: Interfaces that infrastructure implements
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations (no database, no HTTP, no file system)
3. Only depends on Python stdlib
"""
