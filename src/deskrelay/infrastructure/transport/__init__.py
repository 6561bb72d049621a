"""Chat transport integration."""

from deskrelay.infrastructure.transport.bridge_client import BridgeTransportClient
from deskrelay.infrastructure.transport.registry import TransportRegistry

__all__ = ["BridgeTransportClient", "TransportRegistry"]
