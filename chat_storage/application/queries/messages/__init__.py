from chat_storage.application.queries.messages.list_messages import (
    ListMessagesQuery,
    ListMessagesHandler,
)

__all__ = ["ListMessagesQuery", "ListMessagesHandler"]
