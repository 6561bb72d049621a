"""Conversation summarizer protocol."""

from collections.abc import Sequence
from typing import Protocol

from deskrelay.domain.entities.session_context import ChatMessage
from deskrelay.domain.entities.summary import SummaryResult

DEFAULT_SUMMARY_THRESHOLD = 30


class ConversationSummarizer(Protocol):
    """Conversation summarization service.

    Implementations never raise from create_summary: when the preferred
    path fails they degrade to a deterministic summary.
    """

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
        ...

    def should_summarize(
        self,
        conversation_length: int,
        threshold: int = DEFAULT_SUMMARY_THRESHOLD,
    ) -> bool:
        """Check whether a conversation is long enough to summarize."""
        ...
