from chat_storage.application.queries.sessions.list_sessions import (
    ListSessionsQuery,
    ListSessionsHandler,
)
from chat_storage.application.queries.sessions.get_session import (
    GetSessionQuery,
    GetSessionHandler,
)

__all__ = [
    "ListSessionsQuery",
    "ListSessionsHandler",
    "GetSessionQuery",
    "GetSessionHandler",
]
