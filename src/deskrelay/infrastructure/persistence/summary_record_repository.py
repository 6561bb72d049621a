"""SQLite implementation of SummaryRecordRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deskrelay.domain.entities import SummaryRecord
from deskrelay.infrastructure.persistence.datetime_utils import normalize_to_utc
from deskrelay.infrastructure.persistence.models import SummaryRecordModel


class SQLiteSummaryRecordRepository:
    """SQLite SummaryRecordRepository implementation."""

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """Initialize.

        Args:
            session_factory: Async session factory.
        """
        self._session_factory = session_factory

    async def save(self, record: SummaryRecord) -> None:
        """Append a record."""
        async with self._session_factory() as session:
            session.add(
                SummaryRecordModel(
                    ticket_id=record.ticket_id,
                    content=record.content,
                    sender=record.sender,
                    recipient=record.recipient,
                    payload=record.payload,
                    created_at=record.created_at,
                )
            )
            await session.commit()

    async def find_by_ticket(self, ticket_id: int) -> list[SummaryRecord]:
        """Find the records of a ticket, oldest first."""
        async with self._session_factory() as session:
            statement = (
                select(SummaryRecordModel)
                .where(SummaryRecordModel.ticket_id == ticket_id)
                .order_by(SummaryRecordModel.id)  # type: ignore[arg-type]
            )
            result = await session.exec(statement)
            return [
                SummaryRecord(
                    ticket_id=m.ticket_id,
                    content=m.content,
                    payload=m.payload,
                    sender=m.sender,
                    recipient=m.recipient,
                    created_at=normalize_to_utc(m.created_at),
                )
                for m in result.all()
            ]
