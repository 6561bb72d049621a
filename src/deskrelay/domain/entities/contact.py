"""Contact entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Contact:
    """Transport-level identity of a counterparty.

    Attributes:
        number: Stored number. Linked-identity contacts carry the "@lid"
            marker here, sometimes with a stray direct-message domain after it.
        remote_jid: Previously resolved canonical address, if any. Older
            records may hold a malformed value.
        is_group: Whether the contact is a group chat.
        company_id: Tenant the contact belongs to.
        name: Display name, used for body placeholders.
    """

    number: str
    remote_jid: str | None = None
    is_group: bool = False
    company_id: int | None = None
    name: str = ""
