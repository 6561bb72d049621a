"""Tests for send use case helpers."""

from unittest.mock import AsyncMock, Mock

import pytest

from deskrelay.application.use_cases.helpers import (
    get_transport_or_fail,
    report_fault,
    wait_before_send,
)
from deskrelay.domain.exceptions import (
    SendError,
    SendFailureReason,
    TransportNotAvailableError,
)


class TestReportFault:
    """report_fault tests."""

    def test_reports(self) -> None:
        reporter = Mock()
        error = RuntimeError("boom")

        report_fault(reporter, error)

        reporter.capture_exception.assert_called_once_with(error)

    def test_reporter_failure_is_swallowed(self) -> None:
        reporter = Mock()
        reporter.capture_exception.side_effect = RuntimeError("sink down")

        report_fault(reporter, RuntimeError("boom"))


class TestGetTransportOrFail:
    """get_transport_or_fail tests."""

    async def test_returns_transport(self) -> None:
        transport = Mock()
        provider = Mock()
        provider.get_transport = AsyncMock(return_value=transport)

        assert await get_transport_or_fail(provider, "1", Mock()) is transport

    async def test_missing_transport(self) -> None:
        provider = Mock()
        provider.get_transport = AsyncMock(side_effect=TransportNotAvailableError("1"))
        reporter = Mock()

        with pytest.raises(SendError) as exc_info:
            await get_transport_or_fail(provider, "1", reporter)

        assert exc_info.value.reason == SendFailureReason.TRANSPORT
        assert isinstance(exc_info.value.__cause__, TransportNotAvailableError)
        reporter.capture_exception.assert_called_once()


class TestWaitBeforeSend:
    """wait_before_send tests."""

    @pytest.mark.parametrize("delay_ms", [None, 0, -10])
    async def test_no_wait(self, delay_ms: int | None) -> None:
        sleep = AsyncMock()

        await wait_before_send(delay_ms, sleep)

        sleep.assert_not_awaited()

    async def test_wait_in_seconds(self) -> None:
        sleep = AsyncMock()

        await wait_before_send(2000, sleep)

        sleep.assert_awaited_once_with(2.0)
