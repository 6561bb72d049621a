"""Quote context construction."""

import json
import logging
from typing import Any

from deskrelay.domain.entities.quote import (
    EXTENDED_TEXT_FIELD,
    PLAIN_TEXT_FIELD,
    QuoteContext,
)
from deskrelay.domain.repositories.message_repository import MessageRepository

logger = logging.getLogger(__name__)


def _reference_id(quoted: Any) -> str | None:
    """Extract the message identifier from an id or a message-like object."""
    if quoted is None:
        return None
    if isinstance(quoted, dict):
        quoted = quoted.get("id")
    elif not isinstance(quoted, (str, int)):
        quoted = getattr(quoted, "id", quoted)
    if quoted is None:
        return None
    reference = str(quoted).strip()
    return reference or None


class QuoteContextBuilder:
    """Rebuilds the "replying to" structure of a stored message.

    Every failure here degrades to an unquoted send: build returns None
    instead of raising.
    """

    def __init__(self, message_repository: MessageRepository) -> None:
        """Initialize the builder.

        Args:
            message_repository: Store of raw transport messages.
        """
        self._message_repository = message_repository

    async def build(self, quoted: Any) -> QuoteContext | None:
        """Build the quote context of a referenced message.

        Args:
            quoted: Message identifier, or an object/dict with an "id".

        Returns:
            The quote context, or None when there is nothing to quote.
        """
        reference = _reference_id(quoted)
        if reference is None:
            return None

        try:
            stored = await self._message_repository.find_by_id(reference)
        except Exception:
            logger.warning(
                "Lookup of quoted message %s failed, sending unquoted",
                reference,
                exc_info=True,
            )
            return None

        if stored is None:
            logger.info("Quoted message %s not found, sending unquoted", reference)
            return None

        try:
            raw = json.loads(stored.data_json)
            key = raw["key"]
            message = raw["message"]
            if not isinstance(key, dict) or not isinstance(message, dict):
                raise TypeError("key and message must be objects")
        except (ValueError, KeyError, TypeError):
            logger.warning(
                "Quoted message %s has an unreadable payload, sending unquoted",
                reference,
            )
            return None

        if message.get(EXTENDED_TEXT_FIELD) is not None:
            quoted_message = {EXTENDED_TEXT_FIELD: message[EXTENDED_TEXT_FIELD]}
        else:
            quoted_message = {PLAIN_TEXT_FIELD: message.get(PLAIN_TEXT_FIELD)}

        return QuoteContext(key=key, message=quoted_message)
