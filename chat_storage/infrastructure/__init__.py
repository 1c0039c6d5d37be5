"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- persistence/: Prisma repositories for sessions and messages
- rate_limit/: Redis fixed-window rate limiter
- completion/: OpenAI-compatible completion client
- events/: Redis stream domain event publisher
"""
