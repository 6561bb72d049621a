"""Stored transport message entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StoredMessage:
    """Raw transport message as kept by the message store.

    Attributes:
        id: Message identifier.
        data_json: JSON blob with "key" and "message" fields.
        ticket_id: Ticket the message belongs to.
        created_at: When the record was stored.
    """

    id: str
    data_json: str
    ticket_id: int | None = None
    created_at: datetime | None = None
