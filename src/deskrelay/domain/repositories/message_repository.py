"""Message store protocol."""

from typing import Protocol

from deskrelay.domain.entities.stored_message import StoredMessage


class MessageRepository(Protocol):
    """Store of raw transport messages."""

    async def save(self, message: StoredMessage) -> None:
        """Save a message (upsert by id).

        Args:
            message: Message to save.
        """
        ...

    async def find_by_id(self, message_id: str) -> StoredMessage | None:
        """Find a message by its identifier.

        Args:
            message_id: Message identifier.

        Returns:
            The message, or None if not found.
        """
        ...
