"""Deterministic conversation analysis used by summarization."""

import re
from collections.abc import Iterable, Sequence

from deskrelay.domain.entities.session_context import ChatMessage, ChatRole
from deskrelay.domain.entities.summary import Sentiment, SummaryResult

MAX_KEY_POINTS = 5

_SENTENCE_END = re.compile(r"[.!?]+")

_ROLE_LABELS: dict[ChatRole, str] = {
    ChatRole.USER: "Customer",
    ChatRole.ASSISTANT: "Agent",
    ChatRole.SYSTEM: "System",
}


def format_transcript(messages: Sequence[ChatMessage]) -> str:
    """Format messages as a numbered transcript.

    Args:
        messages: Messages in chronological order.

    Returns:
        Lines like "1. Customer: hello".
    """
    return "\n".join(
        f"{index}. {_ROLE_LABELS[message.role]}: {message.content}"
        for index, message in enumerate(messages, start=1)
    )


def extract_key_points(summary: str) -> list[str]:
    """Split summary text into at most five key sentences."""
    sentences = (s.strip() for s in _SENTENCE_END.split(summary))
    return [s for s in sentences if s][:MAX_KEY_POINTS]


def estimate_sentiment(
    messages: Sequence[ChatMessage],
    positive_keywords: Iterable[str],
    negative_keywords: Iterable[str],
) -> Sentiment:
    """Estimate sentiment by counting lexicon hits.

    Each keyword found in a message's lower-cased content counts once for
    that message.

    Args:
        messages: Transcript to analyze.
        positive_keywords: Positive lexicon (lower case).
        negative_keywords: Negative lexicon (lower case).

    Returns:
        NEGATIVE or POSITIVE when one side has strictly more hits,
        NEUTRAL otherwise.
    """
    positive = [k.lower() for k in positive_keywords]
    negative = [k.lower() for k in negative_keywords]

    positive_count = 0
    negative_count = 0
    for message in messages:
        content = message.content.lower()
        positive_count += sum(1 for keyword in positive if keyword in content)
        negative_count += sum(1 for keyword in negative if keyword in content)

    if negative_count > positive_count:
        return Sentiment.NEGATIVE
    if positive_count > negative_count:
        return Sentiment.POSITIVE
    return Sentiment.NEUTRAL


def build_statistical_summary(messages: Sequence[ChatMessage]) -> SummaryResult:
    """Build a summary from message counts alone.

    Sentiment is always NEUTRAL here.

    Args:
        messages: Transcript to summarize.

    Returns:
        SummaryResult with three count-based key points.
    """
    total = len(messages)
    user_count = sum(1 for m in messages if m.role == ChatRole.USER)
    assistant_count = sum(1 for m in messages if m.role == ChatRole.ASSISTANT)

    summary = (
        f"Conversation with {total} messages in total, including "
        f"{user_count} messages from the customer and {assistant_count} replies. "
        "The customer started the conversation asking for help, "
        "and support was provided."
    )
    key_points = [
        f"Total messages: {total}",
        f"Customer messages: {user_count}",
        f"Replies: {assistant_count}",
    ]
    return SummaryResult(
        summary=summary,
        key_points=key_points,
        sentiment=Sentiment.NEUTRAL,
    )
