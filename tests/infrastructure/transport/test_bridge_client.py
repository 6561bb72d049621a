"""Tests for BridgeTransportClient."""

import base64
import json

import httpx
import pytest

from deskrelay.config import TransportAccountConfig
from deskrelay.domain.exceptions import TransportError
from deskrelay.infrastructure.transport import BridgeTransportClient

SENT = {"key": {"id": "3EB0ABC", "remoteJid": "5511999@s.whatsapp.net"}}


def make_client(
    handler, api_token: str | None = "secret"
) -> tuple[BridgeTransportClient, httpx.AsyncClient]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    config = TransportAccountConfig(
        base_url="http://bridge:8080/", session="support", api_token=api_token
    )
    return BridgeTransportClient(config, client=http_client), http_client


class TestSendMessage:
    """send_message tests."""

    async def test_posts_message(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=SENT)

        client, http_client = make_client(handler)

        sent = await client.send_message(
            "5511999@s.whatsapp.net",
            {"text": "Hello"},
            {"quoted": {"key": {"id": "Q"}, "message": {"conversation": "q"}}},
        )
        await http_client.aclose()

        assert sent == SENT
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://bridge:8080/sessions/support/messages"
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content) == {
            "jid": "5511999@s.whatsapp.net",
            "content": {"text": "Hello"},
            "options": {"quoted": {"key": {"id": "Q"}, "message": {"conversation": "q"}}},
        }

    async def test_without_token_or_options(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=SENT)

        client, http_client = make_client(handler, api_token=None)

        await client.send_message("1@s.whatsapp.net", {"text": "Hi"})
        await http_client.aclose()

        assert "Authorization" not in requests[0].headers
        assert json.loads(requests[0].content)["options"] == {}

    async def test_binary_document_is_base64(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=SENT)

        client, http_client = make_client(handler)

        await client.send_message(
            "1@s.whatsapp.net",
            {"document": b"%PDF", "fileName": "a.pdf", "mimetype": "application/pdf"},
        )
        await http_client.aclose()

        content = json.loads(requests[0].content)["content"]
        assert content["document"] == {"base64": base64.b64encode(b"%PDF").decode()}
        assert content["fileName"] == "a.pdf"

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="OK"),
            httpx.Response(204),
            httpx.Response(201, json=["queued"]),
        ],
    )
    async def test_accepted_without_json_record(
        self, response: httpx.Response
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return response

        client, http_client = make_client(handler)

        sent = await client.send_message("1@s.whatsapp.net", {"text": "Hi"})
        await http_client.aclose()

        assert sent == {}

    async def test_error_description_from_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500, json={"error": "No sessions: senderMessageKeys missing"}
            )

        client, http_client = make_client(handler)

        with pytest.raises(TransportError) as exc_info:
            await client.send_message("120363@g.us", {"text": "Hi"})
        await http_client.aclose()

        assert exc_info.value.description == "No sessions: senderMessageKeys missing"

    async def test_error_description_from_text(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad gateway")

        client, http_client = make_client(handler)

        with pytest.raises(TransportError) as exc_info:
            await client.send_message("1@s.whatsapp.net", {"text": "Hi"})
        await http_client.aclose()

        assert exc_info.value.description == "Bad gateway"

    async def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client, http_client = make_client(handler)

        with pytest.raises(TransportError):
            await client.send_message("1@s.whatsapp.net", {"text": "Hi"})
        await http_client.aclose()

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client, http_client = make_client(handler)

        with pytest.raises(TransportError) as exc_info:
            await client.send_message("1@s.whatsapp.net", {"text": "Hi"})
        await http_client.aclose()

        assert "timeout" in exc_info.value.description.lower()


class TestClose:
    """close tests."""

    async def test_shared_client_is_left_open(self) -> None:
        client, http_client = make_client(lambda request: httpx.Response(200, json={}))

        await client.close()

        assert not http_client.is_closed
        await http_client.aclose()

    async def test_own_client_is_closed(self) -> None:
        client = BridgeTransportClient(
            TransportAccountConfig(base_url="http://bridge", session="s")
        )

        await client.close()

        assert client.messages_url == "http://bridge/sessions/s/messages"
