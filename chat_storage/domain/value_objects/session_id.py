"""
SessionId Value Object - integer identity assigned by the store.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionId:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Invalid session ID: {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"Session ID must be positive: {self.value}")

    def __str__(self) -> str:
        return str(self.value)
