"""Domain exceptions."""

from enum import Enum


class SendFailureReason(Enum):
    """Why an outbound message could not be sent."""

    TRANSPORT = "transport"
    GROUP_CRYPTO = "group-crypto"
    NOT_FOUND = "not-found"


class SendError(Exception):
    """Raised when a message could not be delivered to the transport.

    Attributes:
        reason: Failure category.
    """

    def __init__(self, reason: SendFailureReason, message: str = "") -> None:
        """Initialize.

        Args:
            reason: Failure category.
            message: Optional detail.
        """
        self.reason = reason
        super().__init__(message or f"Failed to send message: {reason.value}")


class TransportError(Exception):
    """Raised by a transport client when the send primitive fails.

    Attributes:
        description: Error description reported by the transport.
    """

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(description)


class TransportNotAvailableError(Exception):
    """No transport client is available for a WhatsApp account."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"No transport available for account {account_id}")
