"""Completion errors."""


class LLMError(Exception):
    """A completion request failed."""


class LLMRateLimitError(LLMError):
    """The provider throttled the request or the quota is spent."""


class LLMAuthenticationError(LLMError):
    """The provider rejected the configured credentials."""


class LLMUnavailableError(LLMError):
    """The provider timed out or could not be reached."""
