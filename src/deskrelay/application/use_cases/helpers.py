"""Helper functions shared by the send use cases."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from deskrelay.domain.exceptions import (
    SendError,
    SendFailureReason,
    TransportNotAvailableError,
)
from deskrelay.domain.services.protocols import (
    FaultReporter,
    TransportClient,
    TransportProvider,
)

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


def report_fault(fault_reporter: FaultReporter, error: BaseException) -> None:
    """Report an error without letting the reporter fail the caller."""
    try:
        fault_reporter.capture_exception(error)
    except Exception:
        logger.exception("Fault reporter failed")


async def get_transport_or_fail(
    transport_provider: TransportProvider,
    account_id: str,
    fault_reporter: FaultReporter,
) -> TransportClient:
    """Get the transport of an account.

    Raises:
        SendError: TRANSPORT when the account has no transport.
    """
    try:
        return await transport_provider.get_transport(account_id)
    except TransportNotAvailableError as e:
        logger.error("No transport for account %s", account_id)
        report_fault(fault_reporter, e)
        raise SendError(SendFailureReason.TRANSPORT, str(e)) from e


async def wait_before_send(delay_ms: int | None, sleep: Sleeper = asyncio.sleep) -> None:
    """Wait the caller-supplied pacing delay, if any."""
    if delay_ms and delay_ms > 0:
        await sleep(delay_ms / 1000)
