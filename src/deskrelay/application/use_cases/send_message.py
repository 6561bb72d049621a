"""Send text message use case."""

import asyncio
import logging
from typing import Any

from deskrelay.application.services.body_formatter import BodyFormatter
from deskrelay.application.services.quote_builder import QuoteContextBuilder
from deskrelay.application.use_cases.helpers import (
    Sleeper,
    get_transport_or_fail,
    report_fault,
    wait_before_send,
)
from deskrelay.domain.entities import Contact
from deskrelay.domain.exceptions import SendError, SendFailureReason
from deskrelay.domain.services import resolve_address
from deskrelay.domain.services.protocols import FaultReporter, TransportProvider

logger = logging.getLogger(__name__)

# Error text of a stale group sender-key session
GROUP_CRYPTO_ERROR_SIGNATURE = "senderMessageKeys"


def is_group_crypto_error(error: BaseException) -> bool:
    """Check if a transport error comes from a stale group encryption session."""
    description = getattr(error, "description", None) or str(error)
    return GROUP_CRYPTO_ERROR_SIGNATURE in description


class SendMessageUseCase:
    """Send a text message to a contact.

    Processing flow:
    1. Get the transport of the WhatsApp account
    2. Resolve the contact's address
    3. Build the quote context, if a quoted message is given
    4. Wait the pacing delay
    5. Send the formatted body

    A stale group encryption session gets one unquoted retry. Every
    failure is reported to the fault reporter before SendError is raised.
    """

    def __init__(
        self,
        transport_provider: TransportProvider,
        quote_builder: QuoteContextBuilder,
        fault_reporter: FaultReporter,
        body_formatter: BodyFormatter | None = None,
        debug_addressing: bool = False,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize the use case.

        Args:
            transport_provider: Lookup of per-account transports.
            quote_builder: Builder of reply contexts.
            fault_reporter: Sink for send failures.
            body_formatter: Renderer of body placeholders.
            debug_addressing: Log address resolution at INFO.
            sleep: Coroutine used for the pacing delay.
        """
        self._transport_provider = transport_provider
        self._quote_builder = quote_builder
        self._fault_reporter = fault_reporter
        self._body_formatter = body_formatter or BodyFormatter()
        self._debug_addressing = debug_addressing
        self._sleep = sleep

    async def execute(
        self,
        body: str,
        account_id: str,
        contact: Contact,
        quoted: Any = None,
        delay_ms: int | None = None,
    ) -> dict[str, Any]:
        """Execute the use case.

        Args:
            body: Message body, may contain contact placeholders.
            account_id: WhatsApp account to send from.
            contact: Recipient.
            quoted: Message id (or message-like object) to reply to.
            delay_ms: Pacing delay before sending.

        Returns:
            The transport's handle of the sent message.

        Raises:
            SendError: TRANSPORT or GROUP_CRYPTO when sending failed.
        """
        transport = await get_transport_or_fail(
            self._transport_provider, account_id, self._fault_reporter
        )
        jid = resolve_address(contact, debug=self._debug_addressing).jid

        options: dict[str, Any] = {}
        if quoted is not None:
            quote = await self._quote_builder.build(quoted)
            if quote is not None:
                options = quote.to_options()

        text = self._body_formatter.format(body, contact)
        content = {
            "text": text,
            "contextInfo": {"forwardingScore": 0, "isForwarded": False},
        }

        try:
            await wait_before_send(delay_ms, self._sleep)
            sent = await transport.send_message(jid, content, options)
            logger.info("Message sent to %s", jid)
            return sent
        except Exception as e:
            logger.error("Failed to send message to %s: %s", jid, e)
            if not is_group_crypto_error(e):
                report_fault(self._fault_reporter, e)
                raise SendError(SendFailureReason.TRANSPORT, str(e)) from e

        logger.info("Retrying %s without quote after group crypto error", jid)
        try:
            sent = await transport.send_message(jid, {"text": text})
            logger.info("Message sent to %s on retry", jid)
            return sent
        except Exception as e:
            logger.error("Retry to %s failed: %s", jid, e)
            report_fault(self._fault_reporter, e)
            raise SendError(SendFailureReason.GROUP_CRYPTO, str(e)) from e
