"""SQLModel table definitions."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from deskrelay.infrastructure.persistence.datetime_utils import utc_now


class StoredMessageModel(SQLModel, table=True):
    """Raw transport messages."""

    __tablename__ = "messages"

    id: int | None = Field(default=None, primary_key=True)
    message_id: str = Field(unique=True, index=True)
    ticket_id: int | None = Field(default=None, index=True)
    data_json: str  # {"key": {...}, "message": {...}}
    created_at: datetime = Field(default_factory=utc_now)


class SummaryRecordModel(SQLModel, table=True):
    """Summary audit records."""

    __tablename__ = "summary_records"

    id: int | None = Field(default=None, primary_key=True)
    ticket_id: int = Field(index=True)
    content: str
    sender: str = "system"
    recipient: str = ""
    payload: str  # JSON rendering of SummaryResult
    created_at: datetime = Field(default_factory=utc_now)


class CacheEntryModel(SQLModel, table=True):
    """Key-value cache entries."""

    __tablename__ = "cache_entries"

    id: int | None = Field(default=None, primary_key=True)
    key: str = Field(unique=True, index=True)
    value: str
    expires_at: datetime = Field(index=True)
    updated_at: datetime = Field(default_factory=utc_now)
