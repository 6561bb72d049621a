"""Collaborator protocols."""

from typing import Any, Protocol


class TransportClient(Protocol):
    """Chat transport abstraction (one connected WhatsApp account)."""

    async def send_message(
        self,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a message.

        Args:
            jid: Destination address.
            content: {"text", "contextInfo"} for text, or
                {"document"|"url", "fileName", "mimetype", "caption"} for
                documents.
            options: Send options, e.g. {"quoted": {"key", "message"}}.

        Returns:
            The transport's handle of the sent message.

        Raises:
            TransportError: The transport rejected the message.
        """
        ...


class TransportProvider(Protocol):
    """Lookup of the transport client of a WhatsApp account."""

    async def get_transport(self, account_id: str) -> TransportClient:
        """Get the transport client of an account.

        Raises:
            TransportNotAvailableError: No client for the account.
        """
        ...


class KeyValueCache(Protocol):
    """String key-value store with per-entry expiry."""

    async def get(self, key: str) -> str | None:
        """Return the value, or None if absent or expired."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value, replacing any previous one."""
        ...

    async def delete(self, key: str) -> None:
        """Remove a value. Missing keys are ignored."""
        ...


class CompletionService(Protocol):
    """Single-shot text completion."""

    async def complete(
        self,
        messages: list[dict[str, str]],
        **kwargs: Any,
    ) -> str:
        """Complete a chat prompt.

        Args:
            messages: OpenAI-format message list.
            **kwargs: Overrides such as max_tokens and temperature.

        Returns:
            Generated text.
        """
        ...


class FaultReporter(Protocol):
    """Fire-and-forget exception capture."""

    def capture_exception(self, error: BaseException) -> None:
        """Report an exception."""
        ...
