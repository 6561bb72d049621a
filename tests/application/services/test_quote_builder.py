"""Tests for QuoteContextBuilder."""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from deskrelay.application.services import QuoteContextBuilder
from deskrelay.domain.entities import StoredMessage

KEY = {"remoteJid": "5511999@s.whatsapp.net", "fromMe": False, "id": "ABC123"}


@pytest.fixture
def mock_message_repository() -> Mock:
    """Create mock message repository."""
    repo = Mock()
    repo.find_by_id = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def builder(mock_message_repository: Mock) -> QuoteContextBuilder:
    return QuoteContextBuilder(mock_message_repository)


def stored(data: object) -> StoredMessage:
    return StoredMessage(id="ABC123", data_json=json.dumps(data))


class TestBuild:
    """build tests."""

    async def test_extended_text(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        extended = {"text": "See the link", "matchedText": "https://example.com"}
        mock_message_repository.find_by_id.return_value = stored(
            {"key": KEY, "message": {"extendedTextMessage": extended}}
        )

        quote = await builder.build("ABC123")

        assert quote is not None
        assert quote.key == KEY
        assert quote.message == {"extendedTextMessage": extended}
        mock_message_repository.find_by_id.assert_awaited_once_with("ABC123")

    async def test_plain_text(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        mock_message_repository.find_by_id.return_value = stored(
            {"key": KEY, "message": {"conversation": "hello", "other": 1}}
        )

        quote = await builder.build("ABC123")

        assert quote is not None
        assert quote.message == {"conversation": "hello"}

    async def test_extended_text_preferred(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        mock_message_repository.find_by_id.return_value = stored(
            {
                "key": KEY,
                "message": {
                    "conversation": "plain",
                    "extendedTextMessage": {"text": "rich"},
                },
            }
        )

        quote = await builder.build("ABC123")

        assert quote is not None
        assert quote.message == {"extendedTextMessage": {"text": "rich"}}

    async def test_accepts_message_like_reference(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        mock_message_repository.find_by_id.return_value = stored(
            {"key": KEY, "message": {"conversation": "hi"}}
        )

        await builder.build({"id": "ABC123"})
        await builder.build(Mock(id="ABC123"))

        assert mock_message_repository.find_by_id.await_count == 2
        mock_message_repository.find_by_id.assert_awaited_with("ABC123")

    @pytest.mark.parametrize("reference", [None, "", "   ", {"id": None}])
    async def test_blank_reference(
        self,
        builder: QuoteContextBuilder,
        mock_message_repository: Mock,
        reference: object,
    ) -> None:
        assert await builder.build(reference) is None
        mock_message_repository.find_by_id.assert_not_awaited()

    async def test_not_found(self, builder: QuoteContextBuilder) -> None:
        assert await builder.build("missing") is None

    async def test_invalid_json(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        mock_message_repository.find_by_id.return_value = StoredMessage(
            id="ABC123", data_json="{broken"
        )

        assert await builder.build("ABC123") is None

    async def test_missing_key(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        mock_message_repository.find_by_id.return_value = stored(
            {"message": {"conversation": "hi"}}
        )

        assert await builder.build("ABC123") is None

    async def test_repository_failure(
        self, builder: QuoteContextBuilder, mock_message_repository: Mock
    ) -> None:
        """A failing message store degrades to an unquoted send."""
        mock_message_repository.find_by_id.side_effect = RuntimeError("db down")

        assert await builder.build("ABC123") is None

    @pytest.mark.parametrize(
        "data",
        [
            {"key": KEY, "message": "hello"},
            {"key": KEY, "message": ["hello"]},
            {"key": KEY, "message": None},
            {"key": "ABC123", "message": {"conversation": "hi"}},
            ["not", "an", "object"],
            "plain string",
        ],
    )
    async def test_malformed_payload(
        self,
        builder: QuoteContextBuilder,
        mock_message_repository: Mock,
        data: object,
    ) -> None:
        mock_message_repository.find_by_id.return_value = stored(data)

        assert await builder.build("ABC123") is None
