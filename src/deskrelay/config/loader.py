"""YAML configuration loading with environment variable expansion."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

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


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Invalid or missing configuration value."""


class EnvironmentVariableError(ConfigError):
    """Referenced environment variable is not set."""


# ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} references in a string with environment values.

    Args:
        value: String to expand.

    Returns:
        String with environment variables expanded.

    Raises:
        EnvironmentVariableError: A referenced variable is not set.
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """Expand environment variables in every string of a nested structure."""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """Return a required field, failing if it is absent.

    Args:
        data: Mapping to read from.
        field: Field name.
        parent: Parent path, used in the error message.

    Returns:
        The field value.

    Raises:
        ConfigValidationError: The field is missing.
    """
    if not isinstance(data, dict) or field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _load_transport(data: dict[str, Any]) -> TransportConfig:
    accounts_data = _validate_required_field(data, "accounts", "transport")
    accounts: dict[str, TransportAccountConfig] = {}
    for account_id, account in accounts_data.items():
        parent = f"transport.accounts.{account_id}"
        accounts[str(account_id)] = TransportAccountConfig(
            base_url=_validate_required_field(account, "base_url", parent),
            session=str(_validate_required_field(account, "session", parent)),
            api_token=account.get("api_token"),
        )
    return TransportConfig(
        accounts=accounts,
        timeout_seconds=data.get("timeout_seconds", 30.0),
    )


def _load_summary(data: dict[str, Any]) -> SummaryConfig:
    summary = SummaryConfig(
        max_words=data.get("max_words", 300),
        max_tokens=data.get("max_tokens", 1000),
        temperature=data.get("temperature", 0.3),
    )
    if data.get("positive_keywords"):
        summary.positive_keywords = [str(k) for k in data["positive_keywords"]]
    if data.get("negative_keywords"):
        summary.negative_keywords = [str(k) for k in data["negative_keywords"]]
    return summary


def load_config(path: str | Path) -> Config:
    """Load the configuration file.

    Args:
        path: Path to config.yaml.

    Returns:
        Config object.

    Raises:
        FileNotFoundError: The file does not exist.
        ConfigValidationError: A required value is missing.
        EnvironmentVariableError: A referenced environment variable is not set.
        yaml.YAMLError: The file is not valid YAML.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    data = _expand_recursive(raw_data)

    transport = _load_transport(_validate_required_field(data, "transport"))

    storage_data = _validate_required_field(data, "storage")
    storage = StorageConfig(
        database_path=_validate_required_field(
            storage_data, "database_path", "storage"
        ),
    )

    # LLM (optional; without it summaries use the statistical fallback)
    llm: dict[str, LLMConfig] = {}
    for key, llm_item in (data.get("llm") or {}).items():
        llm[key] = LLMConfig(
            model=_validate_required_field(llm_item, "model", f"llm.{key}"),
            temperature=llm_item.get("temperature", 0.3),
            max_tokens=llm_item.get("max_tokens", 1000),
        )

    session_data = data.get("session") or {}
    session = SessionConfig(
        ttl_seconds=session_data.get("ttl_seconds", 60 * 60 * 24),
        max_messages=session_data.get("max_messages", 20),
        summary_threshold=session_data.get("summary_threshold", 15),
    )

    summary = _load_summary(data.get("summary") or {})

    dispatch_data = data.get("dispatch") or {}
    dispatch = DispatchConfig(
        public_dir=dispatch_data.get("public_dir", "public"),
        debug_addressing=dispatch_data.get("debug_addressing", False),
    )

    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
        )

    return Config(
        transport=transport,
        storage=storage,
        llm=llm,
        session=session,
        summary=summary,
        dispatch=dispatch,
        logging=logging_config,
    )
