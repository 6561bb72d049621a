"""Per-account transport registry."""

from deskrelay.config.models import TransportConfig
from deskrelay.domain.exceptions import TransportNotAvailableError
from deskrelay.domain.services.protocols import TransportClient
from deskrelay.infrastructure.transport.bridge_client import BridgeTransportClient


class TransportRegistry:
    """TransportProvider keeping one client per WhatsApp account."""

    def __init__(self) -> None:
        self._clients: dict[str, TransportClient] = {}

    @classmethod
    def from_config(cls, config: TransportConfig) -> "TransportRegistry":
        """Create a registry with a bridge client for every configured account."""
        registry = cls()
        for account_id, account in config.accounts.items():
            registry.register(
                account_id,
                BridgeTransportClient(account, timeout_seconds=config.timeout_seconds),
            )
        return registry

    def register(self, account_id: str, client: TransportClient) -> None:
        """Register (or replace) the client of an account."""
        self._clients[str(account_id)] = client

    async def get_transport(self, account_id: str) -> TransportClient:
        """Get the client of an account.

        Raises:
            TransportNotAvailableError: No client for the account.
        """
        client = self._clients.get(str(account_id))
        if client is None:
            raise TransportNotAvailableError(str(account_id))
        return client

    async def close(self) -> None:
        """Close every client that supports closing."""
        for client in self._clients.values():
            close = getattr(client, "close", None)
            if close is not None:
                await close()
