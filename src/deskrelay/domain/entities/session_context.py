"""Session context entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ChatRole(Enum):
    """Author role of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class ChatMessage:
    """A single chat turn.

    Attributes:
        role: Author role.
        content: Message text.
        timestamp: When the turn happened. Filled in when appended to a
            session if left empty.
    """

    role: ChatRole
    content: str
    timestamp: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "role": self.role.value,
            "content": self.content,
            "timestamp": _format_datetime(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChatMessage":
        """Deserialize from a dict produced by to_dict.

        Raises:
            ValueError: The role is not a known ChatRole.
            KeyError: A required field is missing.
            TypeError: The data is not an object.
        """
        if not isinstance(data, dict):
            raise TypeError(
                f"Chat message must be an object, got {type(data).__name__}"
            )
        return cls(
            role=ChatRole(data["role"]),
            content=str(data.get("content", "")),
            timestamp=_parse_datetime(data.get("timestamp")),
        )


@dataclass
class SessionContext:
    """Cached conversational state of one session.

    The whole context is written back to the cache on every change.

    Attributes:
        conversation_history: Chat turns, oldest first, bounded in size.
        tags: Unique tags, in the order they were added.
        current_queue: Queue the session is routed to.
        summary: Condensed form of the conversation so far.
        last_interaction: Time of the last write.
        contact_id: Contact back-reference.
        ticket_id: Ticket back-reference.
    """

    conversation_history: list[ChatMessage] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    current_queue: str | None = None
    summary: str | None = None
    last_interaction: datetime | None = None
    contact_id: int | None = None
    ticket_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "conversationHistory": [m.to_dict() for m in self.conversation_history],
            "tags": list(self.tags),
            "currentQueue": self.current_queue,
            "summary": self.summary,
            "lastInteraction": _format_datetime(self.last_interaction),
            "contactId": self.contact_id,
            "ticketId": self.ticket_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionContext":
        """Deserialize from a dict produced by to_dict.

        Raises:
            ValueError: A field holds an invalid value.
            KeyError: A required field is missing.
            TypeError: The data or one of its entries has the wrong shape.
        """
        if not isinstance(data, dict):
            raise TypeError(
                f"Session context must be an object, got {type(data).__name__}"
            )
        tags: list[str] = []
        for tag in data.get("tags") or []:
            if tag not in tags:
                tags.append(tag)
        return cls(
            conversation_history=[
                ChatMessage.from_dict(m) for m in data.get("conversationHistory") or []
            ],
            tags=tags,
            current_queue=data.get("currentQueue"),
            summary=data.get("summary"),
            last_interaction=_parse_datetime(data.get("lastInteraction")),
            contact_id=data.get("contactId"),
            ticket_id=data.get("ticketId"),
        )


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed
