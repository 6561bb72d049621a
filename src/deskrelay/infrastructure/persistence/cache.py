"""SQLite implementation of KeyValueCache."""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timedelta

from sqlalchemy import delete
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from deskrelay.infrastructure.persistence.datetime_utils import (
    normalize_to_utc,
    utc_now,
)
from deskrelay.infrastructure.persistence.exceptions import DatabaseError
from deskrelay.infrastructure.persistence.models import CacheEntryModel

logger = logging.getLogger(__name__)


class SQLiteKeyValueCache:
    """SQLite-backed string cache with per-entry expiry.

    Expired entries read as missing and are removed on access. Every
    write purges whatever else has expired. Writes are upserts, so
    concurrent writers of one key never collide; each call is its own
    transaction, so a read followed by a write is not atomic.
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize.

        Args:
            session_factory: Async session factory.
            clock: Returns the current UTC time.
        """
        self._session_factory = session_factory
        self._clock = clock or utc_now

    async def get(self, key: str) -> str | None:
        """Return the value of a key, or None if absent or expired.

        Raises:
            DatabaseError: The database operation failed.
        """
        try:
            async with self._session_factory() as session:
                model = await self._find_model(session, key)
                if model is None:
                    return None

                if normalize_to_utc(model.expires_at) <= self._clock():
                    await session.delete(model)
                    await session.commit()
                    logger.debug("Cache entry %s expired", key)
                    return None

                return model.value
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to read cache entry {key}: {e}") from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value (upsert) expiring ttl_seconds from now.

        Entries that have already expired are purged in the same
        transaction.

        Raises:
            DatabaseError: The database operation failed.
        """
        now = self._clock()
        expires_at = now + timedelta(seconds=ttl_seconds)
        stmt = sqlite_insert(CacheEntryModel).values(
            key=key, value=value, expires_at=expires_at, updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={
                "value": stmt.excluded.value,
                "expires_at": stmt.excluded.expires_at,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            async with self._session_factory() as session:
                purged = await session.execute(
                    delete(CacheEntryModel).where(
                        CacheEntryModel.expires_at <= now  # type: ignore[arg-type]
                    )
                )
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to write cache entry {key}: {e}") from e

        if purged.rowcount:
            logger.debug("Purged %d expired cache entries", purged.rowcount)

    async def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored.

        Raises:
            DatabaseError: The database operation failed.
        """
        try:
            async with self._session_factory() as session:
                model = await self._find_model(session, key)
                if model:
                    await session.delete(model)
                    await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to delete cache entry {key}: {e}") from e

    async def delete_expired(self, before: datetime | None = None) -> int:
        """Purge entries that expired before the given time.

        Args:
            before: Cut-off time. Defaults to now.

        Returns:
            Number of deleted entries.

        Raises:
            DatabaseError: The database operation failed.
        """
        cutoff = normalize_to_utc(before) if before else self._clock()
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(CacheEntryModel).where(
                        CacheEntryModel.expires_at <= cutoff  # type: ignore[arg-type]
                    )
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to purge expired cache entries: {e}") from e
        return result.rowcount

    async def _find_model(
        self, session: AsyncSession, key: str
    ) -> CacheEntryModel | None:
        result = await session.exec(
            select(CacheEntryModel).where(CacheEntryModel.key == key)
        )
        return result.first()
