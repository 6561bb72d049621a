"""SQLite implementation of MessageRepository."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deskrelay.domain.entities import StoredMessage
from deskrelay.infrastructure.persistence.datetime_utils import normalize_to_utc
from deskrelay.infrastructure.persistence.models import StoredMessageModel


class SQLiteMessageRepository:
    """SQLite MessageRepository implementation.

    Stores raw transport messages as JSON blobs keyed by message id.
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """Initialize.

        Args:
            session_factory: Async session factory.
        """
        self._session_factory = session_factory

    async def save(self, message: StoredMessage) -> None:
        """Save a message (upsert).

        Args:
            message: Message to save.
        """
        async with self._session_factory() as session:
            existing = await self._find_model(session, message.id)

            if existing:
                existing.data_json = message.data_json
                existing.ticket_id = message.ticket_id
                session.add(existing)
            else:
                session.add(self._to_model(message))

            await session.commit()

    async def find_by_id(self, message_id: str) -> StoredMessage | None:
        """Find a message by id.

        Args:
            message_id: Message identifier.

        Returns:
            The message, or None if not found.
        """
        async with self._session_factory() as session:
            model = await self._find_model(session, message_id)
            if model is None:
                return None
            return self._to_entity(model)

    async def _find_model(
        self, session: AsyncSession, message_id: str
    ) -> StoredMessageModel | None:
        result = await session.exec(
            select(StoredMessageModel).where(
                StoredMessageModel.message_id == message_id
            )
        )
        return result.first()

    def _to_entity(self, model: StoredMessageModel) -> StoredMessage:
        return StoredMessage(
            id=model.message_id,
            data_json=model.data_json,
            ticket_id=model.ticket_id,
            created_at=normalize_to_utc(model.created_at),
        )

    def _to_model(self, entity: StoredMessage) -> StoredMessageModel:
        model = StoredMessageModel(
            message_id=entity.id,
            data_json=entity.data_json,
            ticket_id=entity.ticket_id,
        )
        if entity.created_at is not None:
            model.created_at = entity.created_at
        return model
