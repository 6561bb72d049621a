"""Domain entities."""

from deskrelay.domain.entities.address import AddressSource, ResolvedAddress
from deskrelay.domain.entities.contact import Contact
from deskrelay.domain.entities.quote import QuoteContext
from deskrelay.domain.entities.session_context import (
    ChatMessage,
    ChatRole,
    SessionContext,
)
from deskrelay.domain.entities.stored_message import StoredMessage
from deskrelay.domain.entities.summary import (
    Sentiment,
    SummaryRecord,
    SummaryResult,
    create_summary_record,
)

__all__ = [
    "AddressSource",
    "ChatMessage",
    "ChatRole",
    "Contact",
    "QuoteContext",
    "ResolvedAddress",
    "Sentiment",
    "SessionContext",
    "StoredMessage",
    "SummaryRecord",
    "SummaryResult",
    "create_summary_record",
]
