"""Summary audit record repository protocol."""

from typing import Protocol

from deskrelay.domain.entities.summary import SummaryRecord


class SummaryRecordRepository(Protocol):
    """Store of summary audit records."""

    async def save(self, record: SummaryRecord) -> None:
        """Append a record.

        Args:
            record: Record to save.
        """
        ...

    async def find_by_ticket(self, ticket_id: int) -> list[SummaryRecord]:
        """Find records for a ticket, oldest first.

        Args:
            ticket_id: Ticket id.

        Returns:
            Records of the ticket.
        """
        ...
