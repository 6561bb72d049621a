"""Send document use case."""

import asyncio
import logging
import random
import re
import string
from pathlib import Path
from typing import Any

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

PDF_MIMETYPE = "application/pdf"
FILE_NAME_SUFFIX_LENGTH = 5

_ILLEGAL_FILE_NAME_CHARS = re.compile(r'[\\/:"*?<>|]')
_SUFFIX_ALPHABET = string.ascii_letters + string.digits


def sanitize_caption(caption: str) -> str:
    """Replace characters that are illegal in file names with "-"."""
    return _ILLEGAL_FILE_NAME_CHARS.sub("-", caption)


def random_suffix(length: int = FILE_NAME_SUFFIX_LENGTH) -> str:
    """Return a random alphanumeric suffix."""
    return "".join(random.choices(_SUFFIX_ALPHABET, k=length))


class SendDocumentUseCase:
    """Send a PDF document to a contact.

    The document comes from a URL when one is given, otherwise from
    "{public_dir}/company{company_id}/{caption}.pdf".
    """

    def __init__(
        self,
        transport_provider: TransportProvider,
        fault_reporter: FaultReporter,
        public_dir: str | Path = "public",
        debug_addressing: bool = False,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize the use case.

        Args:
            transport_provider: Lookup of per-account transports.
            fault_reporter: Sink for send failures.
            public_dir: Root directory of locally stored documents.
            debug_addressing: Log address resolution at INFO.
            sleep: Coroutine used for the pacing delay.
        """
        self._transport_provider = transport_provider
        self._fault_reporter = fault_reporter
        self._public_dir = Path(public_dir)
        self._debug_addressing = debug_addressing
        self._sleep = sleep

    def local_path(self, contact: Contact, safe_caption: str) -> Path:
        """Path of the locally stored document for a caption."""
        return self._public_dir / f"company{contact.company_id}" / f"{safe_caption}.pdf"

    async def execute(
        self,
        account_id: str,
        contact: Contact,
        caption: str,
        url: str | None = None,
        delay_ms: int | None = None,
    ) -> dict[str, Any]:
        """Execute the use case.

        Args:
            account_id: WhatsApp account to send from.
            contact: Recipient.
            caption: Document caption, also used to find the local file.
            url: Remote document URL.
            delay_ms: Pacing delay before sending.

        Returns:
            The transport's handle of the sent message.

        Raises:
            SendError: NOT_FOUND when there is no document to send,
                TRANSPORT when sending failed.
        """
        transport = await get_transport_or_fail(
            self._transport_provider, account_id, self._fault_reporter
        )
        jid = resolve_address(contact, debug=self._debug_addressing).jid

        safe_caption = sanitize_caption(caption)
        file_name = f"{safe_caption}-{random_suffix()}.pdf"

        document: dict[str, str] | bytes
        if url:
            document = {"url": url}
        else:
            path = self.local_path(contact, safe_caption)
            if not path.is_file():
                error = SendError(
                    SendFailureReason.NOT_FOUND, f"Document not found: {path}"
                )
                logger.error("Document not found for %s: %s", jid, path)
                report_fault(self._fault_reporter, error)
                raise error
            document = await asyncio.to_thread(path.read_bytes)

        content = {
            "document": document,
            "fileName": file_name,
            "mimetype": PDF_MIMETYPE,
            "caption": safe_caption,
        }

        try:
            await wait_before_send(delay_ms, self._sleep)
            sent = await transport.send_message(jid, content)
            logger.info("Document %s sent to %s", file_name, jid)
            return sent
        except Exception as e:
            logger.error("Failed to send document to %s: %s", jid, e)
            report_fault(self._fault_reporter, e)
            raise SendError(SendFailureReason.TRANSPORT, str(e)) from e
