"""Domain repositories."""

from deskrelay.domain.repositories.message_repository import MessageRepository
from deskrelay.domain.repositories.summary_record_repository import (
    SummaryRecordRepository,
)

__all__ = ["MessageRepository", "SummaryRecordRepository"]
