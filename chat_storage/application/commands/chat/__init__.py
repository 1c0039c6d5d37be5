from chat_storage.application.commands.chat.add_message import (
    AddMessageCommand,
    AddMessageHandler,
    AddMessageResult,
)

__all__ = [
    "AddMessageCommand",
    "AddMessageHandler",
    "AddMessageResult",
]
