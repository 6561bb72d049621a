"""LLM-based conversation summarizer implementation."""

import logging
from collections.abc import Sequence

from deskrelay.config.models import SummaryConfig
from deskrelay.domain.entities.session_context import ChatMessage
from deskrelay.domain.entities.summary import (
    SummaryResult,
    create_summary_record,
)
from deskrelay.domain.repositories.summary_record_repository import (
    SummaryRecordRepository,
)
from deskrelay.domain.services.conversation_analysis import (
    build_statistical_summary,
    estimate_sentiment,
    extract_key_points,
    format_transcript,
)
from deskrelay.domain.services.conversation_summarizer import (
    DEFAULT_SUMMARY_THRESHOLD,
)
from deskrelay.domain.services.protocols import CompletionService
from deskrelay.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)

EMPTY_SUMMARY_TEXT = "Unable to generate a summary."


class LLMConversationSummarizer:
    """Conversation summarizer preferring an LLM.

    Without a completion service, or when the completion fails, the
    summary falls back to message statistics. create_summary never raises.
    """

    def __init__(
        self,
        completion_service: CompletionService | None,
        summary_repository: SummaryRecordRepository | None = None,
        config: SummaryConfig | None = None,
    ) -> None:
        """Initialize the summarizer.

        Args:
            completion_service: LLM completion, or None when unavailable.
            summary_repository: Store for audit records of produced summaries.
            config: Summary settings.
        """
        self._completion_service = completion_service
        self._summary_repository = summary_repository
        self._config = config or SummaryConfig()
        self._template = create_jinja_env().get_template("summary_prompt.j2")

    async def create_summary(
        self,
        messages: Sequence[ChatMessage],
        ticket_id: int | None = None,
    ) -> SummaryResult:
        """Summarize a conversation.

        Args:
            messages: Transcript in chronological order.
            ticket_id: Ticket to attach an audit record to.

        Returns:
            The summary.
        """
        if self._completion_service is None:
            result = build_statistical_summary(messages)
        else:
            try:
                result = await self._summarize_with_llm(
                    self._completion_service, messages
                )
            except Exception:
                logger.exception("LLM summary failed, using statistical summary")
                result = build_statistical_summary(messages)

        if ticket_id:
            await self._save_record(ticket_id, result)

        return result

    def should_summarize(
        self,
        conversation_length: int,
        threshold: int = DEFAULT_SUMMARY_THRESHOLD,
    ) -> bool:
        """Check whether a conversation is long enough to summarize."""
        return conversation_length >= threshold

    def build_prompt(self, messages: Sequence[ChatMessage]) -> str:
        """Render the summary instruction prompt.

        Args:
            messages: Transcript in chronological order.

        Returns:
            Prompt string.
        """
        return self._template.render(
            transcript=format_transcript(messages),
            max_words=self._config.max_words,
        )

    async def _summarize_with_llm(
        self,
        completion_service: CompletionService,
        messages: Sequence[ChatMessage],
    ) -> SummaryResult:
        response = await completion_service.complete(
            [{"role": "user", "content": self.build_prompt(messages)}],
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
        )
        summary_text = (response or "").strip() or EMPTY_SUMMARY_TEXT

        return SummaryResult(
            summary=summary_text,
            key_points=extract_key_points(summary_text),
            sentiment=estimate_sentiment(
                messages,
                self._config.positive_keywords,
                self._config.negative_keywords,
            ),
        )

    async def _save_record(self, ticket_id: int, result: SummaryResult) -> None:
        if self._summary_repository is None:
            return
        try:
            await self._summary_repository.save(
                create_summary_record(ticket_id, result)
            )
        except Exception:
            logger.exception("Failed to save summary for ticket %s", ticket_id)
