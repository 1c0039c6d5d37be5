"""
Completion Client Port - produces an assistant reply for a user message.
Implementation: chat_storage/infrastructure/completion/openai_completion_client.py

Provider failures are never raised. They come back as a CompletionResult
whose outcome says what went wrong and whose reply is safe to show the user.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CompletionOutcome(str, Enum):
    SUCCESS = "success"
    AUTH_FAILED = "auth_failed"
    QUOTA_EXCEEDED = "quota_exceeded"
    MISCONFIGURED = "misconfigured"
    UNAVAILABLE = "unavailable"
    EMPTY_RESPONSE = "empty_response"


DEGRADED_REPLIES = {
    CompletionOutcome.AUTH_FAILED: (
        "Invalid API key. Please check your completion provider credentials."
    ),
    CompletionOutcome.QUOTA_EXCEEDED: "Rate limit exceeded. Please try again later.",
    CompletionOutcome.MISCONFIGURED: (
        "Model not found or endpoint incorrect. Please check configuration."
    ),
    CompletionOutcome.UNAVAILABLE: (
        "AI service temporarily unavailable. Please try again."
    ),
    CompletionOutcome.EMPTY_RESPONSE: (
        "I'm here to help! Could you please rephrase your question?"
    ),
}


@dataclass(frozen=True)
class CompletionResult:
    reply: str
    next_context: Optional[str]
    outcome: CompletionOutcome
    attempts: int = 1

    @property
    def degraded(self) -> bool:
        return self.outcome is not CompletionOutcome.SUCCESS

    @classmethod
    def success(
        cls, reply: str, prior_context: Optional[str], attempts: int = 1
    ) -> "CompletionResult":
        next_context = f"{prior_context}\n{reply}" if prior_context else reply
        return cls(
            reply=reply,
            next_context=next_context,
            outcome=CompletionOutcome.SUCCESS,
            attempts=attempts,
        )

    @classmethod
    def degraded_with(
        cls,
        outcome: CompletionOutcome,
        prior_context: Optional[str],
        attempts: int = 1,
    ) -> "CompletionResult":
        """Substitute reply; the caller's context passes through unchanged."""
        return cls(
            reply=DEGRADED_REPLIES[outcome],
            next_context=prior_context,
            outcome=outcome,
            attempts=attempts,
        )


class CompletionClient(ABC):
    @abstractmethod
    async def complete(
        self, user_text: str, prior_context: Optional[str] = None
    ) -> CompletionResult: ...
