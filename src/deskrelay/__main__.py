"""Application entry point."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from deskrelay.application.services import QuoteContextBuilder, SessionContextManager
from deskrelay.application.use_cases import (
    SendDocumentUseCase,
    SendMessageUseCase,
    SummarizeSessionUseCase,
)
from deskrelay.config import Config, ConfigError, LoggingConfig, load_config
from deskrelay.domain.entities import Contact
from deskrelay.domain.exceptions import SendError
from deskrelay.infrastructure.llm import LLMClient, LLMConversationSummarizer
from deskrelay.infrastructure.observability import LoggingFaultReporter
from deskrelay.infrastructure.persistence import (
    DatabaseManager,
    SQLiteKeyValueCache,
    SQLiteMessageRepository,
    SQLiteSummaryRecordRepository,
)
from deskrelay.infrastructure.transport import TransportRegistry

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


@dataclass
class Application:
    """Wired application components."""

    db_manager: DatabaseManager
    transports: TransportRegistry
    context_manager: SessionContextManager
    send_message: SendMessageUseCase
    send_document: SendDocumentUseCase
    summarize_session: SummarizeSessionUseCase

    async def close(self) -> None:
        """Release transports and database connections."""
        await self.transports.close()
        await self.db_manager.close()


async def build_application(config: Config) -> Application:
    """Build the application from configuration.

    Args:
        config: Loaded configuration.

    Returns:
        Wired components.
    """
    db_manager = DatabaseManager(config.storage.database_path)
    await db_manager.create_tables()

    message_repository = SQLiteMessageRepository(db_manager.get_session)
    summary_repository = SQLiteSummaryRecordRepository(db_manager.get_session)
    cache = SQLiteKeyValueCache(db_manager.get_session)
    purged = await cache.delete_expired()
    if purged:
        logger.info("Purged %d expired session contexts", purged)

    transports = TransportRegistry.from_config(config.transport)
    fault_reporter = LoggingFaultReporter()

    llm_config = config.summary_llm()
    if llm_config is None:
        logger.info("No LLM configured, summaries use message statistics")
    completion_service = LLMClient(llm_config) if llm_config else None
    summarizer = LLMConversationSummarizer(
        completion_service,
        summary_repository=summary_repository,
        config=config.summary,
    )

    context_manager = SessionContextManager(cache, config.session)

    return Application(
        db_manager=db_manager,
        transports=transports,
        context_manager=context_manager,
        send_message=SendMessageUseCase(
            transport_provider=transports,
            quote_builder=QuoteContextBuilder(message_repository),
            fault_reporter=fault_reporter,
            debug_addressing=config.dispatch.debug_addressing,
        ),
        send_document=SendDocumentUseCase(
            transport_provider=transports,
            fault_reporter=fault_reporter,
            public_dir=config.dispatch.public_dir,
            debug_addressing=config.dispatch.debug_addressing,
        ),
        summarize_session=SummarizeSessionUseCase(
            context_manager=context_manager,
            summarizer=summarizer,
            threshold=config.session.summary_threshold,
        ),
    )


def _add_contact_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--account", required=True, help="WhatsApp account id")
    parser.add_argument("--number", required=True, help="Contact number")
    parser.add_argument("--remote-jid", help="Stored canonical address")
    parser.add_argument("--group", action="store_true", help="Contact is a group")
    parser.add_argument("--company", type=int, help="Company id of the contact")
    parser.add_argument("--name", default="", help="Contact display name")
    parser.add_argument("--delay-ms", type=int, help="Pacing delay before sending")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="deskrelay",
        description="Outbound WhatsApp relay for customer support",
    )
    parser.add_argument(
        "--config", type=Path, default=Path("config.yaml"), help="Config file path"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    send_parser = subparsers.add_parser("send", help="Send a text message")
    _add_contact_arguments(send_parser)
    send_parser.add_argument("--quote", help="Id of the message to reply to")
    send_parser.add_argument("body", help="Message body")

    document_parser = subparsers.add_parser("send-document", help="Send a PDF")
    _add_contact_arguments(document_parser)
    document_parser.add_argument("--caption", required=True, help="Document caption")
    document_parser.add_argument("--url", help="Remote document URL")

    summarize_parser = subparsers.add_parser(
        "summarize", help="Summarize a session's conversation"
    )
    summarize_parser.add_argument("session_id", help="Session identifier")
    summarize_parser.add_argument(
        "--force", action="store_true", help="Ignore the length threshold"
    )

    return parser


def _contact_from_args(args: argparse.Namespace) -> Contact:
    return Contact(
        number=args.number,
        remote_jid=args.remote_jid,
        is_group=args.group,
        company_id=args.company,
        name=args.name,
    )


async def run_command(app: Application, args: argparse.Namespace) -> int:
    """Run one command.

    Returns:
        Process exit status.
    """
    if args.command == "send":
        sent = await app.send_message.execute(
            body=args.body,
            account_id=args.account,
            contact=_contact_from_args(args),
            quoted=args.quote,
            delay_ms=args.delay_ms,
        )
        print(json.dumps(sent, ensure_ascii=False))
    elif args.command == "send-document":
        sent = await app.send_document.execute(
            account_id=args.account,
            contact=_contact_from_args(args),
            caption=args.caption,
            url=args.url,
            delay_ms=args.delay_ms,
        )
        print(json.dumps(sent, ensure_ascii=False))
    elif args.command == "summarize":
        result = await app.summarize_session.execute(args.session_id, force=args.force)
        if result is None:
            logger.info("Session %s was not summarized", args.session_id)
        else:
            print(json.dumps(result.to_dict(), ensure_ascii=False))
    return 0


async def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, load configuration and run the command."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Failed to load config: %s", e)
        return 1

    configure_logging(config.logging)

    app = await build_application(config)
    try:
        return await run_command(app, args)
    except SendError as e:
        logger.error("Send failed (%s): %s", e.reason.value, e)
        return 1
    finally:
        await app.close()


def run() -> None:
    """Run the async main function."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    run()
