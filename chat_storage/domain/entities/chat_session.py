"""
ChatSession Entity - A chat session owned by one user.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from chat_storage.domain.exceptions.validation_error import DomainValidationError
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId


@dataclass
class ChatSession:
    id: Optional[SessionId]  # None until the store assigns one
    user_id: UserId
    session_name: str
    is_favorite: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(cls, user_id: UserId, session_name: str) -> ChatSession:
        """Factory method for a new, not yet persisted session."""
        name = _validated_name(session_name)
        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            user_id=user_id,
            session_name=name,
            is_favorite=False,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id

    def rename(self, new_name: str) -> None:
        self.session_name = _validated_name(new_name)
        self.touch()

    def toggle_favorite(self) -> bool:
        """Flip the favorite flag and return the new value."""
        self.is_favorite = not self.is_favorite
        self.touch()
        return self.is_favorite

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


def _validated_name(name: str) -> str:
    if name is None or not name.strip():
        raise DomainValidationError("Session name is required")
    return name.strip()
