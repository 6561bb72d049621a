"""Quote context entity."""

from dataclasses import dataclass
from typing import Any

EXTENDED_TEXT_FIELD = "extendedTextMessage"
PLAIN_TEXT_FIELD = "conversation"


@dataclass(frozen=True)
class QuoteContext:
    """Transport metadata marking an outbound message as a reply.

    Attributes:
        key: Transport key of the quoted message.
        message: Exactly one of {"extendedTextMessage": ...} or
            {"conversation": ...}.
    """

    key: dict[str, Any]
    message: dict[str, Any]

    def to_options(self) -> dict[str, Any]:
        """Build the send options carrying this quote.

        Returns:
            {"quoted": {"key": ..., "message": ...}}
        """
        return {"quoted": {"key": self.key, "message": self.message}}
