"""HTTP client for a WhatsApp Web bridge."""

import base64
import logging
from typing import Any

import httpx

from deskrelay.config.models import TransportAccountConfig
from deskrelay.domain.exceptions import TransportError

logger = logging.getLogger(__name__)


def _encode_content(content: dict[str, Any]) -> dict[str, Any]:
    """Make a message payload JSON-safe (binary documents as base64)."""
    document = content.get("document")
    if isinstance(document, (bytes, bytearray)):
        return {
            **content,
            "document": {"base64": base64.b64encode(document).decode("ascii")},
        }
    return content


def _error_description(response: httpx.Response) -> str:
    """Extract the bridge's error description from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(data, dict):
        for field in ("error", "message"):
            if data.get(field):
                return str(data[field])
    return f"HTTP {response.status_code}"


class BridgeTransportClient:
    """TransportClient talking to one bridge session over HTTP.

    Messages are posted to {base_url}/sessions/{session}/messages as
    {"jid", "content", "options"}; the bridge answers with the sent
    message as JSON.
    """

    def __init__(
        self,
        config: TransportAccountConfig,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Bridge connection settings of the account.
            timeout_seconds: Per-request timeout.
            client: Shared httpx client. One is created when omitted.
        """
        self._config = config
        self._timeout = timeout_seconds
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None

    @property
    def messages_url(self) -> str:
        """Endpoint for outbound messages."""
        base_url = self._config.base_url.rstrip("/")
        return f"{base_url}/sessions/{self._config.session}/messages"

    async def send_message(
        self,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a message through the bridge.

        Args:
            jid: Destination address.
            content: Message payload.
            options: Send options such as the quoted message.

        Returns:
            The bridge's record of the sent message, or an empty dict when
            the bridge accepted the message without returning one.

        Raises:
            TransportError: The bridge rejected the message or was unreachable.
        """
        headers = {}
        if self._config.api_token:
            headers["Authorization"] = f"Bearer {self._config.api_token}"

        body = {"jid": jid, "content": _encode_content(content), "options": options or {}}

        try:
            response = await self._client.post(
                self.messages_url,
                json=body,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Bridge timeout: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Bridge request error: {e}") from e

        if response.is_error:
            description = _error_description(response)
            logger.debug(
                "Bridge rejected message to %s (%d): %s",
                jid,
                response.status_code,
                description,
            )
            raise TransportError(description)

        try:
            sent = response.json()
        except ValueError:
            sent = None
        if not isinstance(sent, dict):
            logger.warning(
                "Bridge accepted message to %s without a JSON record (%d)",
                jid,
                response.status_code,
            )
            return {}
        return sent

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
