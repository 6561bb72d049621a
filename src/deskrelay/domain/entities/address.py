"""Resolved transport address."""

from dataclasses import dataclass
from enum import Enum

GROUP_DOMAIN = "g.us"
USER_DOMAIN = "s.whatsapp.net"
LID_DOMAIN = "lid"
LEGACY_USER_DOMAIN = "c.us"

RECOGNIZED_DOMAINS: frozenset[str] = frozenset({GROUP_DOMAIN, USER_DOMAIN, LID_DOMAIN})


class AddressSource(Enum):
    """Which contact signal an address was derived from."""

    LINKED_IDENTITY = "linked_identity"
    STORED_JID = "stored_jid"
    SYNTHESIZED = "synthesized"


@dataclass(frozen=True)
class ResolvedAddress:
    """Canonical transport address (JID) of a contact.

    Attributes:
        jid: Normalized address ending in exactly one recognized domain.
        source: Signal the address was derived from.
    """

    jid: str
    source: AddressSource

    @property
    def domain(self) -> str:
        """Domain part of the address."""
        return self.jid.rsplit("@", 1)[-1]

    def is_group(self) -> bool:
        """Check if the address points to a group chat."""
        return self.domain == GROUP_DOMAIN
