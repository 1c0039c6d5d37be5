from chat_storage.infrastructure.completion.openai_completion_client import (
    OpenAICompletionClient,
)

__all__ = ["OpenAICompletionClient"]
