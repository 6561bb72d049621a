"""Async completion client backed by LiteLLM."""

import logging
from typing import Any

import litellm
from litellm.exceptions import (
    APIConnectionError,
    AuthenticationError,
    RateLimitError,
    Timeout,
)

from deskrelay.config import LLMConfig
from deskrelay.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
    LLMUnavailableError,
)

logger = logging.getLogger(__name__)


class LLMClient:
    """CompletionService over litellm.acompletion.

    Configured model settings are defaults; per-call keyword arguments
    win. Provider errors are translated into the LLMError hierarchy.
    """

    def __init__(self, config: LLMConfig) -> None:
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    async def complete(
        self,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> str:
        """Run a chat completion.

        Args:
            messages: Chat messages, e.g. [{"role": "user", "content": "..."}].
            **kwargs: Completion parameters overriding the configured ones.

        Returns:
            The reply text. Empty when the provider returned no content.

        Raises:
            LLMAuthenticationError: Credentials were rejected.
            LLMRateLimitError: The provider throttled the request.
            LLMUnavailableError: The provider could not be reached in time.
            LLMError: Any other provider failure.
        """
        params: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": messages,
        }
        params.update(kwargs)

        logger.debug(
            "Completion request: model=%s messages=%d",
            params["model"],
            len(messages),
        )

        try:
            response = await litellm.acompletion(**params)
        except AuthenticationError as e:
            logger.error("Completion rejected credentials: %s", e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("Completion rate limited: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except (Timeout, APIConnectionError) as e:
            logger.warning("Completion provider unreachable: %s", e)
            raise LLMUnavailableError(str(e)) from e
        except Exception as e:
            logger.error("Completion failed: %s", e)
            raise LLMError(str(e)) from e

        return response.choices[0].message.content or ""
