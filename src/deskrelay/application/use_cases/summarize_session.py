"""Summarize session use case."""

import logging

from deskrelay.application.services.session_context import SessionContextManager
from deskrelay.domain.entities import SummaryResult
from deskrelay.domain.services.conversation_summarizer import ConversationSummarizer

logger = logging.getLogger(__name__)


class SummarizeSessionUseCase:
    """Condense a long session history into its summary.

    Processing flow:
    1. Load the session context
    2. Skip if the history is below the threshold
    3. Summarize the history (audit record attached to the session's ticket)
    4. Store the summary on the context
    """

    def __init__(
        self,
        context_manager: SessionContextManager,
        summarizer: ConversationSummarizer,
        threshold: int,
    ) -> None:
        """Initialize the use case.

        Args:
            context_manager: Session context store.
            summarizer: Conversation summarizer.
            threshold: History size from which sessions get summarized.
        """
        self._context_manager = context_manager
        self._summarizer = summarizer
        self._threshold = threshold

    async def execute(self, session_id: str, force: bool = False) -> SummaryResult | None:
        """Execute the use case.

        Args:
            session_id: Session identifier.
            force: Summarize regardless of the threshold.

        Returns:
            The summary, or None when the session was not summarized.
        """
        context = await self._context_manager.get_context(session_id)
        history = context.conversation_history

        if not history:
            logger.debug("Session %s has no history, skipping summary", session_id)
            return None

        if not force and not self._summarizer.should_summarize(
            len(history), self._threshold
        ):
            logger.debug(
                "Session %s has %d messages, below threshold %d",
                session_id,
                len(history),
                self._threshold,
            )
            return None

        result = await self._summarizer.create_summary(
            history, ticket_id=context.ticket_id
        )
        await self._context_manager.set_summary(session_id, result.summary)
        logger.info("Stored summary for session %s", session_id)
        return result
