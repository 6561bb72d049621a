"""Observability infrastructure."""

from deskrelay.infrastructure.observability.fault_reporter import LoggingFaultReporter

__all__ = ["LoggingFaultReporter"]
