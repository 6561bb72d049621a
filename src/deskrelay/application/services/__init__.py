"""Application services."""

from deskrelay.application.services.body_formatter import BodyFormatter
from deskrelay.application.services.quote_builder import QuoteContextBuilder
from deskrelay.application.services.session_context import SessionContextManager

__all__ = ["BodyFormatter", "QuoteContextBuilder", "SessionContextManager"]
