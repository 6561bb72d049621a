"""Tests for session context entities."""

from datetime import datetime, timezone

import pytest

from deskrelay.domain.entities import ChatMessage, ChatRole, SessionContext


class TestChatMessage:
    """ChatMessage tests."""

    def test_to_dict(self) -> None:
        message = ChatMessage(
            role=ChatRole.USER,
            content="Hello",
            timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )

        assert message.to_dict() == {
            "role": "user",
            "content": "Hello",
            "timestamp": "2024-05-01T12:00:00+00:00",
        }

    def test_from_dict_without_timestamp(self) -> None:
        message = ChatMessage.from_dict({"role": "assistant", "content": "Hi"})

        assert message.role == ChatRole.ASSISTANT
        assert message.content == "Hi"
        assert message.timestamp is None

    def test_from_dict_naive_timestamp_is_utc(self) -> None:
        """Timestamps without offset are read as UTC."""
        message = ChatMessage.from_dict(
            {"role": "user", "content": "x", "timestamp": "2024-05-01T12:00:00"}
        )

        assert message.timestamp == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_from_dict_unknown_role(self) -> None:
        with pytest.raises(ValueError):
            ChatMessage.from_dict({"role": "robot", "content": "x"})


class TestSessionContext:
    """SessionContext tests."""

    def test_defaults(self) -> None:
        context = SessionContext()

        assert context.conversation_history == []
        assert context.tags == []
        assert context.current_queue is None
        assert context.summary is None
        assert context.ticket_id is None

    def test_to_dict_uses_camel_case_keys(self) -> None:
        context = SessionContext(
            conversation_history=[ChatMessage(role=ChatRole.USER, content="Hi")],
            tags=["vip"],
            current_queue="billing",
            summary="Asked about an invoice",
            last_interaction=datetime(2024, 5, 1, tzinfo=timezone.utc),
            contact_id=3,
            ticket_id=42,
        )

        data = context.to_dict()

        assert data["conversationHistory"] == [
            {"role": "user", "content": "Hi", "timestamp": None}
        ]
        assert data["tags"] == ["vip"]
        assert data["currentQueue"] == "billing"
        assert data["summary"] == "Asked about an invoice"
        assert data["lastInteraction"] == "2024-05-01T00:00:00+00:00"
        assert data["contactId"] == 3
        assert data["ticketId"] == 42

    def test_dict_round_trip(self) -> None:
        context = SessionContext(
            conversation_history=[
                ChatMessage(
                    role=ChatRole.ASSISTANT,
                    content="How can I help?",
                    timestamp=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
                )
            ],
            tags=["new"],
            ticket_id=7,
        )

        assert SessionContext.from_dict(context.to_dict()) == context

    def test_from_dict_removes_duplicate_tags(self) -> None:
        context = SessionContext.from_dict({"tags": ["a", "b", "a"]})

        assert context.tags == ["a", "b"]

    def test_from_dict_tolerates_missing_fields(self) -> None:
        context = SessionContext.from_dict({})

        assert context == SessionContext()
