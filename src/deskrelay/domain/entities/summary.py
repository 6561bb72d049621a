"""Conversation summary entities."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Sentiment(Enum):
    """Overall sentiment of a conversation."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class SummaryResult:
    """Condensed representation of a conversation.

    Attributes:
        summary: Summary text.
        key_points: Up to five key sentences.
        sentiment: Overall sentiment.
    """

    summary: str
    key_points: list[str] = field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL

    def to_dict(self) -> dict[str, object]:
        """Serialize to a JSON-compatible dict."""
        return {
            "summary": self.summary,
            "keyPoints": list(self.key_points),
            "sentiment": self.sentiment.value,
        }


@dataclass(frozen=True)
class SummaryRecord:
    """Audit record of a produced summary, attached to a ticket.

    Attributes:
        ticket_id: Ticket the summary belongs to.
        content: Human-readable rendering of the summary.
        payload: JSON rendering of the SummaryResult.
        sender: Author label of the synthetic message.
        recipient: Recipient label of the synthetic message.
        created_at: Creation time.
    """

    ticket_id: int
    content: str
    payload: str
    sender: str = "system"
    recipient: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def create_summary_record(ticket_id: int, result: SummaryResult) -> SummaryRecord:
    """Build the audit record for a summary.

    Args:
        ticket_id: Ticket the summary belongs to.
        result: The produced summary.

    Returns:
        SummaryRecord combining summary text, key points and sentiment.
    """
    content = (
        f"Conversation summary: {result.summary}\n\n"
        f"Key points: {'; '.join(result.key_points)}\n"
        f"Sentiment: {result.sentiment.value}"
    )
    return SummaryRecord(
        ticket_id=ticket_id,
        content=content,
        payload=json.dumps(result.to_dict(), ensure_ascii=False),
    )
