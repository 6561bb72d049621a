"""Configuration management."""

from deskrelay.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from deskrelay.config.models import (
    Config,
    DispatchConfig,
    LLMConfig,
    LoggingConfig,
    SessionConfig,
    StorageConfig,
    SummaryConfig,
    TransportAccountConfig,
    TransportConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "DispatchConfig",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "SessionConfig",
    "StorageConfig",
    "SummaryConfig",
    "TransportAccountConfig",
    "TransportConfig",
    "expand_env_vars",
    "load_config",
]
