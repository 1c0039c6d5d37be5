from chat_storage.application.commands.sessions.create_session import (
    CreateSessionCommand,
    CreateSessionHandler,
)
from chat_storage.application.commands.sessions.rename_session import (
    RenameSessionCommand,
    RenameSessionHandler,
)
from chat_storage.application.commands.sessions.toggle_favorite import (
    ToggleFavoriteCommand,
    ToggleFavoriteHandler,
)
from chat_storage.application.commands.sessions.delete_session import (
    DeleteSessionCommand,
    DeleteSessionHandler,
)

__all__ = [
    "CreateSessionCommand",
    "CreateSessionHandler",
    "RenameSessionCommand",
    "RenameSessionHandler",
    "ToggleFavoriteCommand",
    "ToggleFavoriteHandler",
    "DeleteSessionCommand",
    "DeleteSessionHandler",
]
