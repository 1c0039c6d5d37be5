"""
AddMessage Command - store a user message together with the assistant reply.

Handler:
1. Validate content (blank content never reaches the rate limiter)
2. Count the request against the caller's rate limit
3. Load the session for its owner
4. Save the USER message, publish MESSAGE_ADDED
5. Ask the completion client for a reply (never raises)
6. Save the ASSISTANT message with the reply, publish MESSAGE_ADDED
7. Touch the session, publish SESSION_UPDATED
8. Return [user, assistant]

Storage errors propagate unchanged and abort the exchange where they occur.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from chat_storage.application.common.interfaces import Command, CommandHandler
from chat_storage.application.services.session_guard import SessionGuard
from chat_storage.domain.entities.chat_message import ChatMessage
from chat_storage.domain.events import MessageEvent, SessionEvent, SessionEventType
from chat_storage.domain.exceptions import DomainValidationError
from chat_storage.domain.ports.repositories import MessageRepository, SessionRepository
from chat_storage.domain.ports.services import (
    CompletionClient,
    CompletionOutcome,
    EventPublisher,
    RateLimiter,
)
from chat_storage.domain.value_objects.sender_type import SenderType
from chat_storage.domain.value_objects.session_id import SessionId
from chat_storage.domain.value_objects.user_id import UserId
from chat_storage.observability import (
    decrement_active_exchanges,
    increment_active_exchanges,
    increment_completion_outcome,
    observe_exchange_latency,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddMessageResult:
    user_message: ChatMessage
    assistant_message: ChatMessage
    completion_outcome: CompletionOutcome

    @property
    def messages(self) -> list[ChatMessage]:
        return [self.user_message, self.assistant_message]


@dataclass(frozen=True)
class AddMessageCommand(Command[AddMessageResult]):
    session_id: SessionId
    user_id: UserId
    content: str
    context: Optional[str] = None


class AddMessageHandler(CommandHandler[AddMessageResult]):
    def __init__(
        self,
        rate_limiter: RateLimiter,
        session_guard: SessionGuard,
        session_repository: SessionRepository,
        message_repository: MessageRepository,
        completion_client: CompletionClient,
        event_publisher: EventPublisher,
    ):
        self._rate_limiter = rate_limiter
        self._session_guard = session_guard
        self._session_repository = session_repository
        self._message_repository = message_repository
        self._completion_client = completion_client
        self._event_publisher = event_publisher

    async def execute(self, command: AddMessageCommand) -> AddMessageResult:
        if command.content is None or not command.content.strip():
            raise DomainValidationError("Content is required", "content")

        await self._rate_limiter.check(command.user_id)
        session = await self._session_guard.load_owned(
            command.session_id, command.user_id
        )

        logger.info(
            f"Adding message to session {command.session_id} for user: {command.user_id}"
        )
        started = time.perf_counter()
        increment_active_exchanges()
        outcome_label = "error"
        try:
            user_message = await self._message_repository.add(
                ChatMessage.create(
                    session_id=command.session_id,
                    sender=SenderType.USER,
                    content=command.content,
                    context=command.context,
                )
            )
            logger.info(f"User message saved with id: {user_message.id}")
            self._event_publisher.publish(
                MessageEvent.added(user_message, command.user_id)
            )

            result = await self._completion_client.complete(
                command.content, command.context
            )
            outcome_label = result.outcome.value
            increment_completion_outcome(result.outcome.value)
            if result.degraded:
                logger.warning(
                    f"Completion degraded ({result.outcome.value}) "
                    f"after {result.attempts} attempt(s) for session {command.session_id}"
                )

            assistant_message = await self._message_repository.add(
                ChatMessage.create(
                    session_id=command.session_id,
                    sender=SenderType.ASSISTANT,
                    content=result.reply,
                    context=result.next_context,
                )
            )
            logger.info(f"Assistant message saved with id: {assistant_message.id}")
            self._event_publisher.publish(
                MessageEvent.added(assistant_message, command.user_id)
            )

            session.touch()
            session = await self._session_repository.save(session)
            self._event_publisher.publish(
                SessionEvent.of(SessionEventType.UPDATED, session)
            )
        finally:
            elapsed = time.perf_counter() - started
            decrement_active_exchanges()
            observe_exchange_latency(outcome_label, elapsed)
            logger.info(f"Chat completion finished in {int(elapsed * 1000)} ms")

        return AddMessageResult(
            user_message=user_message,
            assistant_message=assistant_message,
            completion_outcome=result.outcome,
        )
