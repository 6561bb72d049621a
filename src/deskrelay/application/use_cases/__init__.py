"""Use cases."""

from deskrelay.application.use_cases.send_document import SendDocumentUseCase
from deskrelay.application.use_cases.send_message import SendMessageUseCase
from deskrelay.application.use_cases.summarize_session import SummarizeSessionUseCase

__all__ = [
    "SendDocumentUseCase",
    "SendMessageUseCase",
    "SummarizeSessionUseCase",
]
