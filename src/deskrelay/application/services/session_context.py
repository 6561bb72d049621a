"""Session context store backed by a TTL cache.

Every mutation reads the whole context, changes it and writes the whole
blob back with a fresh expiry. Two concurrent writers on the same session
are not serialized here: the last write wins. Callers needing strict
per-session ordering must serialize on their side.
"""

import json
import logging
from dataclasses import replace
from datetime import datetime, timezone

from deskrelay.config.models import SessionConfig
from deskrelay.domain.entities.session_context import (
    ChatMessage,
    ChatRole,
    SessionContext,
)
from deskrelay.domain.services.protocols import KeyValueCache

logger = logging.getLogger(__name__)

CONTEXT_KEY_PREFIX = "context:"
SUMMARY_PREFIX = "Summary of the previous conversation: "


def make_context_key(session_id: str) -> str:
    """Build the cache key of a session."""
    return f"{CONTEXT_KEY_PREFIX}{session_id}"


class SessionContextManager:
    """Per-session conversational memory.

    Keeps a sliding window of the latest chat turns, the session's tags,
    current queue and summary. Entries expire after the configured TTL
    since their last write.
    """

    def __init__(
        self,
        cache: KeyValueCache,
        config: SessionConfig | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            cache: Key-value cache holding serialized contexts.
            config: Session settings (TTL and window size).
        """
        self._cache = cache
        self._config = config or SessionConfig()

    @property
    def max_messages(self) -> int:
        """Sliding window size."""
        return self._config.max_messages

    async def get_context(self, session_id: str) -> SessionContext:
        """Get the context of a session.

        A missing or unreadable entry yields a new empty context. The new
        context is not written until the first mutation.

        Args:
            session_id: Session identifier.

        Returns:
            The session context.
        """
        cached = await self._cache.get(make_context_key(session_id))
        if cached:
            try:
                return SessionContext.from_dict(json.loads(cached))
            except (ValueError, KeyError, TypeError, AttributeError):
                logger.warning(
                    "Discarding unreadable context for session %s", session_id
                )

        return SessionContext(last_interaction=datetime.now(timezone.utc))

    async def save_context(self, session_id: str, context: SessionContext) -> None:
        """Write a context, replacing any previous value and refreshing expiry.

        Args:
            session_id: Session identifier.
            context: Context to store.
        """
        await self._cache.set(
            make_context_key(session_id),
            json.dumps(context.to_dict(), ensure_ascii=False),
            self._config.ttl_seconds,
        )

    async def add_message(
        self,
        session_id: str,
        message: ChatMessage,
        ticket_id: int | None = None,
    ) -> SessionContext:
        """Append a chat turn to a session.

        Keeps only the latest max_messages turns, oldest evicted first.

        Args:
            session_id: Session identifier.
            message: Turn to append. A missing timestamp defaults to now.
            ticket_id: Ticket to link; an existing link is never cleared.

        Returns:
            The updated context.
        """
        context = await self.get_context(session_id)
        now = datetime.now(timezone.utc)

        if message.timestamp is None:
            message = replace(message, timestamp=now)
        context.conversation_history.append(message)
        context.last_interaction = now

        if ticket_id:
            context.ticket_id = ticket_id

        if len(context.conversation_history) > self._config.max_messages:
            context.conversation_history = context.conversation_history[
                -self._config.max_messages :
            ]

        await self.save_context(session_id, context)
        return context

    async def get_conversation_history(self, session_id: str) -> list[ChatMessage]:
        """Get the history for downstream consumers.

        When the session has a summary, it comes first as a system turn.

        Args:
            session_id: Session identifier.

        Returns:
            Chat turns, oldest first.
        """
        context = await self.get_context(session_id)

        if context.summary:
            return [
                ChatMessage(
                    role=ChatRole.SYSTEM,
                    content=f"{SUMMARY_PREFIX}{context.summary}",
                ),
                *context.conversation_history,
            ]

        return context.conversation_history

    async def set_summary(self, session_id: str, summary: str) -> None:
        """Store the summary of a session."""
        context = await self.get_context(session_id)
        context.summary = summary
        await self.save_context(session_id, context)

    async def set_current_queue(self, session_id: str, queue_name: str) -> None:
        """Set the queue the session is routed to."""
        context = await self.get_context(session_id)
        context.current_queue = queue_name
        await self.save_context(session_id, context)

    async def get_current_queue(self, session_id: str) -> str | None:
        """Get the queue the session is routed to."""
        context = await self.get_context(session_id)
        return context.current_queue

    async def add_tag(self, session_id: str, tag: str) -> None:
        """Add a tag. No-op if the session already has it."""
        context = await self.get_context(session_id)

        if tag not in context.tags:
            context.tags.append(tag)
            await self.save_context(session_id, context)

    async def remove_tag(self, session_id: str, tag: str) -> None:
        """Remove a tag. No-op if the session does not have it."""
        context = await self.get_context(session_id)

        if tag in context.tags:
            context.tags = [t for t in context.tags if t != tag]
            await self.save_context(session_id, context)

    async def get_tags(self, session_id: str) -> list[str]:
        """Get the tags of a session."""
        context = await self.get_context(session_id)
        return context.tags

    async def clear_context(self, session_id: str) -> None:
        """Delete the context of a session."""
        await self._cache.delete(make_context_key(session_id))

    async def get_context_size(self, session_id: str) -> int:
        """Get the number of chat turns stored for a session."""
        context = await self.get_context(session_id)
        return len(context.conversation_history)
