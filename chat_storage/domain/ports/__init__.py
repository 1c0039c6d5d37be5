"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

Subfolders:
- repositories/  → Data persistence interfaces (Prisma)
- services/      → Rate limiter (Redis), completion provider (OpenAI-compatible),
                   event publisher (Redis streams)
"""
