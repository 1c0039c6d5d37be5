"""
Completion client for OpenAI-compatible chat completion endpoints.

Sends one non-streaming request per attempt through AsyncOpenAI (SDK retries
disabled) and retries only HTTP 500/503 with a fixed wait, using tenacity.
Every failure is classified into a CompletionOutcome with a substitute reply,
so callers never see provider exceptions.

Usage:
    client = OpenAICompletionClient(
        AsyncOpenAI(api_key=..., base_url=..., max_retries=0),
        CompletionSettings.from_config(),
    )
    result = await client.complete("Hello", prior_context=None)
    result.reply, result.next_context, result.outcome
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from openai import AsyncOpenAI, APIStatusError, OpenAIError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    stop_after_delay,
    wait_fixed,
)

from chat_storage.config.settings import CompletionSettings
from chat_storage.domain.ports.services.completion_client import (
    CompletionClient,
    CompletionOutcome,
    CompletionResult,
)
from chat_storage.observability.metrics import observe_completion_attempts

logger = logging.getLogger(__name__)

TRANSIENT_STATUS_CODES = frozenset({500, 503})

_STATUS_OUTCOMES = {
    401: CompletionOutcome.AUTH_FAILED,
    404: CompletionOutcome.MISCONFIGURED,
    429: CompletionOutcome.QUOTA_EXCEEDED,
}


def is_transient_error(error: BaseException) -> bool:
    return (
        isinstance(error, APIStatusError)
        and error.status_code in TRANSIENT_STATUS_CODES
    )


def classify_status(status_code: int) -> CompletionOutcome:
    return _STATUS_OUTCOMES.get(status_code, CompletionOutcome.UNAVAILABLE)


class OpenAICompletionClient(CompletionClient):
    def __init__(
        self,
        client: AsyncOpenAI,
        settings: CompletionSettings,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        self._client = client
        self._settings = settings
        self._sleep = sleep

    def _retrying(self) -> AsyncRetrying:
        stop = stop_after_attempt(self._settings.max_attempts)
        if self._settings.retry_deadline_seconds is not None:
            stop = stop | stop_after_delay(self._settings.retry_deadline_seconds)
        kwargs = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return AsyncRetrying(
            stop=stop,
            wait=wait_fixed(self._settings.retry_delay_seconds),
            retry=retry_if_exception(is_transient_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
            **kwargs,
        )

    def build_messages(
        self, user_text: str, prior_context: Optional[str]
    ) -> list[dict[str, str]]:
        """System instruction, optional prior context as an assistant turn, user turn."""
        messages = [{"role": "system", "content": self._settings.system_prompt}]
        if prior_context:
            messages.append({"role": "assistant", "content": prior_context})
        messages.append({"role": "user", "content": user_text})
        return messages

    async def complete(
        self, user_text: str, prior_context: Optional[str] = None
    ) -> CompletionResult:
        messages = self.build_messages(user_text, prior_context)
        attempts = 0
        try:
            async for attempt in self._retrying():
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    logger.info(
                        f"Sending completion request (attempt {attempts}): "
                        f"model={self._settings.model}"
                    )
                    response = await self._client.chat.completions.create(
                        model=self._settings.model,
                        messages=messages,
                        max_tokens=self._settings.max_tokens,
                        temperature=self._settings.temperature,
                        top_p=self._settings.top_p,
                        stream=False,
                    )
        except APIStatusError as e:
            outcome = classify_status(e.status_code)
            logger.error(
                f"Completion provider returned {e.status_code} after "
                f"{attempts} attempt(s): {outcome.value}"
            )
            return self._degraded(outcome, prior_context, attempts)
        except OpenAIError as e:
            logger.error(f"Completion provider unreachable: {type(e).__name__}: {e}")
            return self._degraded(CompletionOutcome.UNAVAILABLE, prior_context, attempts)
        except ValueError as e:
            # A 200 whose body the SDK cannot decode as JSON
            logger.warning(f"Undecodable completion response: {type(e).__name__}: {e}")
            return self._degraded(
                CompletionOutcome.EMPTY_RESPONSE, prior_context, attempts
            )
        except Exception as e:
            logger.error(f"Completion request failed: {type(e).__name__}: {e}")
            return self._degraded(CompletionOutcome.UNAVAILABLE, prior_context, attempts)

        observe_completion_attempts(attempts)
        return self._parse(response, prior_context, attempts)

    def _parse(
        self, response: Any, prior_context: Optional[str], attempts: int
    ) -> CompletionResult:
        try:
            content = extract_content(response)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Malformed completion response: {type(e).__name__}: {e}")
            content = None

        if not isinstance(content, str) or not content.strip():
            logger.warning("Empty or invalid response from completion provider")
            return CompletionResult.degraded_with(
                CompletionOutcome.EMPTY_RESPONSE, prior_context, attempts
            )

        logger.info("Successfully received completion response")
        return CompletionResult.success(content.strip(), prior_context, attempts)

    def _degraded(
        self, outcome: CompletionOutcome, prior_context: Optional[str], attempts: int
    ) -> CompletionResult:
        observe_completion_attempts(attempts)
        return CompletionResult.degraded_with(outcome, prior_context, attempts)


def extract_content(response: Any) -> Optional[str]:
    """First choice's message content, or None when the shape is not a chat completion."""
    choices = getattr(response, "choices", None)
    if not isinstance(choices, list) or not choices:
        return None
    message = getattr(choices[0], "message", None)
    if message is None:
        return None
    return getattr(message, "content", None)
