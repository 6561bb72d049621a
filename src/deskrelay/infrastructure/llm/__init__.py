"""LLM integration."""

from deskrelay.infrastructure.llm.client import LLMClient
from deskrelay.infrastructure.llm.conversation_summarizer import (
    LLMConversationSummarizer,
)
from deskrelay.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
    LLMUnavailableError,
)

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMConversationSummarizer",
    "LLMError",
    "LLMRateLimitError",
    "LLMUnavailableError",
]
