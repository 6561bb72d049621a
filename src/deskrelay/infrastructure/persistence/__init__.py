"""Persistence infrastructure."""

from deskrelay.infrastructure.persistence.cache import SQLiteKeyValueCache
from deskrelay.infrastructure.persistence.database import DatabaseManager
from deskrelay.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from deskrelay.infrastructure.persistence.message_repository import (
    SQLiteMessageRepository,
)
from deskrelay.infrastructure.persistence.models import (
    CacheEntryModel,
    StoredMessageModel,
    SummaryRecordModel,
)
from deskrelay.infrastructure.persistence.summary_record_repository import (
    SQLiteSummaryRecordRepository,
)

__all__ = [
    "CacheEntryModel",
    "DatabaseError",
    "DatabaseManager",
    "PersistenceError",
    "SQLiteKeyValueCache",
    "SQLiteMessageRepository",
    "SQLiteSummaryRecordRepository",
    "StoredMessageModel",
    "SummaryRecordModel",
]
