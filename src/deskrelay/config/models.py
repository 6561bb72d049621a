"""Configuration dataclasses."""

from dataclasses import dataclass, field


@dataclass
class TransportAccountConfig:
    """Connection settings for one WhatsApp account on the bridge."""

    base_url: str
    session: str
    api_token: str | None = None


@dataclass
class TransportConfig:
    """Transport settings.

    Attributes:
        accounts: Bridge connection settings keyed by account id.
        timeout_seconds: HTTP timeout for a single bridge call.
    """

    accounts: dict[str, TransportAccountConfig] = field(default_factory=dict)
    timeout_seconds: float = 30.0


@dataclass
class StorageConfig:
    """Storage settings."""

    database_path: str


@dataclass
class LLMConfig:
    """LLM settings (passed to LiteLLM completion)."""

    model: str
    temperature: float = 0.3
    max_tokens: int = 1000


@dataclass
class SessionConfig:
    """Session context settings.

    Attributes:
        ttl_seconds: Expiry applied on every write of a session context.
        max_messages: Sliding window size of the conversation history.
        summary_threshold: History size at which a session gets summarized.
    """

    ttl_seconds: int = 60 * 60 * 24
    max_messages: int = 20
    summary_threshold: int = 15


DEFAULT_POSITIVE_KEYWORDS: tuple[str, ...] = (
    "thank",
    "great",
    "good",
    "excellent",
    "satisfied",
    "perfect",
    "grateful",
    "happy",
)

DEFAULT_NEGATIVE_KEYWORDS: tuple[str, ...] = (
    "problem",
    "error",
    "bad",
    "terrible",
    "awful",
    "frustrated",
    "angry",
    "broken",
)


@dataclass
class SummaryConfig:
    """Conversation summary settings."""

    max_words: int = 300
    max_tokens: int = 1000
    temperature: float = 0.3
    positive_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_POSITIVE_KEYWORDS)
    )
    negative_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_NEGATIVE_KEYWORDS)
    )


@dataclass
class DispatchConfig:
    """Outbound dispatch settings.

    Attributes:
        public_dir: Root directory of locally stored documents.
        debug_addressing: Log every address resolution step at INFO.
    """

    public_dir: str = "public"
    debug_addressing: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None


@dataclass
class Config:
    """Application configuration."""

    transport: TransportConfig
    storage: StorageConfig
    llm: dict[str, LLMConfig] = field(default_factory=dict)
    session: SessionConfig = field(default_factory=SessionConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    logging: LoggingConfig | None = None

    def summary_llm(self) -> LLMConfig | None:
        """Return the LLM settings used for summaries, if any are configured."""
        return self.llm.get("summary", self.llm.get("default"))
