"""Tests for the command-line entry point."""

import json
import logging
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from sqlmodel import select

from deskrelay.__main__ import (
    build_application,
    build_parser,
    configure_logging,
    main,
)
from deskrelay.config import LoggingConfig, load_config
from deskrelay.domain.entities import ChatMessage, ChatRole
from deskrelay.domain.exceptions import TransportError
from deskrelay.infrastructure.persistence import CacheEntryModel, SQLiteKeyValueCache

CONFIG = """
transport:
  accounts:
    "1":
      base_url: http://bridge:8080
      session: support
storage:
  database_path: "{database_path}"
session:
  summary_threshold: 2
"""


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG.format(database_path=tmp_path / "deskrelay.db"))
    return path


@pytest.fixture
def restore_log_levels() -> Generator[None, None, None]:
    root_level = logging.getLogger().level
    httpx_level = logging.getLogger("httpx").level
    yield
    logging.getLogger().setLevel(root_level)
    logging.getLogger("httpx").setLevel(httpx_level)


class TestConfigureLogging:
    """configure_logging tests."""

    def test_none_is_noop(self, restore_log_levels: None) -> None:
        level = logging.getLogger().level

        configure_logging(None)

        assert logging.getLogger().level == level

    def test_levels(self, restore_log_levels: None) -> None:
        configure_logging(LoggingConfig(level="warning", loggers={"httpx": "ERROR"}))

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.ERROR


class TestBuildParser:
    """build_parser tests."""

    def test_send(self) -> None:
        args = build_parser().parse_args(
            [
                "send",
                "--account", "1",
                "--number", "5511999",
                "--group",
                "--quote", "ABC",
                "--delay-ms", "500",
                "Hello",
            ]
        )

        assert args.command == "send"
        assert args.account == "1"
        assert args.group is True
        assert args.quote == "ABC"
        assert args.delay_ms == 500
        assert args.body == "Hello"
        assert args.config == Path("config.yaml")

    def test_send_document(self) -> None:
        args = build_parser().parse_args(
            [
                "--config", "other.yaml",
                "send-document",
                "--account", "1",
                "--number", "5511999",
                "--company", "3",
                "--caption", "Invoice",
            ]
        )

        assert args.command == "send-document"
        assert args.company == 3
        assert args.caption == "Invoice"
        assert args.url is None
        assert args.config == Path("other.yaml")

    def test_summarize(self) -> None:
        args = build_parser().parse_args(["summarize", "s1", "--force"])

        assert args.session_id == "s1"
        assert args.force is True

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """main tests."""

    async def test_missing_config(self, tmp_path: Path) -> None:
        status = await main(["--config", str(tmp_path / "missing.yaml"), "summarize", "s1"])

        assert status == 1

    async def test_send_error_exits_with_failure(self, config_path: Path) -> None:
        with patch(
            "deskrelay.infrastructure.transport.bridge_client.BridgeTransportClient.send_message",
            new=AsyncMock(side_effect=TransportError("bridge down")),
        ):
            status = await main(
                [
                    "--config", str(config_path),
                    "send", "--account", "1", "--number", "5511999", "Hello",
                ]
            )

        assert status == 1

    async def test_send_prints_handle(
        self, config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch(
            "deskrelay.infrastructure.transport.bridge_client.BridgeTransportClient.send_message",
            new=AsyncMock(return_value={"key": {"id": "SENT"}}),
        ):
            status = await main(
                [
                    "--config", str(config_path),
                    "send", "--account", "1", "--number", "5511999", "Hello",
                ]
            )

        assert status == 0
        assert json.loads(capsys.readouterr().out) == {"key": {"id": "SENT"}}

    async def test_unknown_account(self, config_path: Path) -> None:
        status = await main(
            [
                "--config", str(config_path),
                "send", "--account", "9", "--number", "5511999", "Hello",
            ]
        )

        assert status == 1

    async def test_summarize_without_llm(
        self, config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        app = await build_application(load_config(config_path))
        for content in ("Hello", "Thanks"):
            await app.context_manager.add_message(
                "s1", ChatMessage(role=ChatRole.USER, content=content), ticket_id=4
            )
        await app.close()

        status = await main(["--config", str(config_path), "summarize", "s1"])

        assert status == 0
        output = json.loads(capsys.readouterr().out)
        assert output["sentiment"] == "neutral"
        assert output["keyPoints"][0] == "Total messages: 2"

    async def test_startup_purges_expired_contexts(self, config_path: Path) -> None:
        config = load_config(config_path)
        app = await build_application(config)
        stale = SQLiteKeyValueCache(
            app.db_manager.get_session,
            clock=lambda: datetime.now(timezone.utc) - timedelta(days=2),
        )
        await stale.set("context:old", "{}", ttl_seconds=60)
        await app.close()

        app = await build_application(config)
        async with app.db_manager.get_session() as session:
            result = await session.exec(select(CacheEntryModel))
            keys = [entry.key for entry in result.all()]
        await app.close()

        assert keys == []
