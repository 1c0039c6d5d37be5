"""
MessageId Value Object - integer identity assigned by the store.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MessageId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Invalid message ID: {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"Message ID must be positive: {self.value}")

    def __str__(self) -> str:
        return str(self.value)
