"""Fault reporting."""

import logging

logger = logging.getLogger(__name__)


class LoggingFaultReporter:
    """FaultReporter writing captured exceptions to the log."""

    def __init__(self, logger_name: str | None = None) -> None:
        """Initialize.

        Args:
            logger_name: Logger to report to. Defaults to this module's logger.
        """
        self._logger = logging.getLogger(logger_name) if logger_name else logger

    def capture_exception(self, error: BaseException) -> None:
        """Log an exception with its traceback."""
        self._logger.error(
            "Captured %s: %s",
            type(error).__name__,
            error,
            exc_info=(type(error), error, error.__traceback__),
        )
