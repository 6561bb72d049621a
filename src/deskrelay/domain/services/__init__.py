"""Domain services."""

from deskrelay.domain.services.address_resolver import normalize_jid, resolve_address
from deskrelay.domain.services.conversation_summarizer import (
    DEFAULT_SUMMARY_THRESHOLD,
    ConversationSummarizer,
)
from deskrelay.domain.services.protocols import (
    CompletionService,
    FaultReporter,
    KeyValueCache,
    TransportClient,
    TransportProvider,
)

__all__ = [
    "DEFAULT_SUMMARY_THRESHOLD",
    "CompletionService",
    "ConversationSummarizer",
    "FaultReporter",
    "KeyValueCache",
    "TransportClient",
    "TransportProvider",
    "normalize_jid",
    "resolve_address",
]
