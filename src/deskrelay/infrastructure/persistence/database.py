"""SQLite engine and session lifecycle."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

# Registers the table models on SQLModel.metadata
from deskrelay.infrastructure.persistence import models as _models  # noqa: F401

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


def database_url(database_path: str) -> str:
    """Build the aiosqlite URL for a database file or ":memory:"."""
    return f"sqlite+aiosqlite:///{database_path}"


class DatabaseManager:
    """Owns the async engine shared by the cache and the repositories.

    The engine is created on first use. Repositories receive
    get_session as their session factory.
    """

    def __init__(self, database_path: str) -> None:
        """Initialize.

        Args:
            database_path: SQLite file path, or ":memory:".
        """
        self._database_path = database_path
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def get_engine(self) -> AsyncEngine:
        """Return the engine, creating it and the file's directory if needed."""
        if self._engine is None:
            if self._database_path != MEMORY_DATABASE:
                Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
            self._engine = create_async_engine(database_url(self._database_path))
            self._session_factory = async_sessionmaker(
                self._engine, class_=AsyncSession, expire_on_commit=False
            )
            logger.debug("Opened database %s", self._database_path)
        return self._engine

    async def create_tables(self) -> None:
        """Create missing tables. Existing ones are kept as they are."""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session on the shared engine."""
        self.get_engine()
        assert self._session_factory is not None
        async with self._session_factory() as session:
            yield session

    async def close(self) -> None:
        """Dispose of the engine. A later call to get_engine reopens it."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
