"""Configuration loader for the compliance client.

Settings are read from a JSON file when one is given (explicitly or through
``CBOM_COMPLIANCE_CONFIG``); otherwise built-in defaults apply. A couple of
values can be overridden individually through environment variables. This
module performs its own lightweight validation rather than invoking a JSON
Schema validator.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_PATH_ENV_VAR = "CBOM_COMPLIANCE_CONFIG"
BASE_URL_ENV_VAR = "CBOM_COMPLIANCE_BASE_URL"
LOG_LEVEL_ENV_VAR = "CBOM_COMPLIANCE_LOG_LEVEL"

DEFAULT_BASE_URL = "http://localhost:8081"
DEFAULT_POLICY = "quantum_safe"
LOCAL_COMPLIANCE_SERVICE_NAME = "Basic Backend Compliance Service"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    retry_attempts: int = 3
    retry_wait_seconds: float = 2.0
    default_policy: str = DEFAULT_POLICY
    local_service_name: str = LOCAL_COMPLIANCE_SERVICE_NAME
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating each field present."""
        defaults = cls()

        base_url = data.get("baseUrl", defaults.base_url)
        if not isinstance(base_url, str) or not base_url:
            raise ConfigError("'baseUrl' must be a non-empty string")

        timeout = data.get("timeout", defaults.timeout)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("'timeout' must be a positive number")

        retry_attempts = data.get("retryAttempts", defaults.retry_attempts)
        if isinstance(retry_attempts, bool) or not isinstance(retry_attempts, int):
            raise ConfigError("'retryAttempts' must be an integer")
        if retry_attempts < 1:
            raise ConfigError("'retryAttempts' must be at least 1")

        retry_wait = data.get("retryWaitSeconds", defaults.retry_wait_seconds)
        if isinstance(retry_wait, bool) or not isinstance(retry_wait, (int, float)) or retry_wait < 0:
            raise ConfigError("'retryWaitSeconds' must be a non-negative number")

        default_policy = data.get("defaultPolicy", defaults.default_policy)
        if not isinstance(default_policy, str) or not default_policy:
            raise ConfigError("'defaultPolicy' must be a non-empty string")

        local_service_name = data.get("localServiceName", defaults.local_service_name)
        if not isinstance(local_service_name, str):
            raise ConfigError("'localServiceName' must be a string")

        log_level = data.get("logLevel", defaults.log_level)
        log_level = _normalise_log_level(log_level)

        return cls(
            base_url=base_url.rstrip("/"),
            timeout=float(timeout),
            retry_attempts=retry_attempts,
            retry_wait_seconds=float(retry_wait),
            default_policy=default_policy,
            local_service_name=local_service_name,
            log_level=log_level,
        )

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)


def _normalise_log_level(value: Any) -> str:
    if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
        known = ", ".join(sorted(_LOG_LEVELS))
        raise ConfigError(f"Invalid log level {value!r}. Expected one of: {known}")
    return value.upper()


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. CBOM_COMPLIANCE_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _read_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")
    return data


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to a JSON config file. If not provided, uses the
            CBOM_COMPLIANCE_CONFIG env var or falls back to built-in defaults.

    Returns:
        A validated Settings object with environment overrides applied.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    settings = Settings.from_dict(_read_config_file(config_path)) if config_path else Settings()

    base_url = os.environ.get(BASE_URL_ENV_VAR, "").strip()
    if base_url:
        settings = replace(settings, base_url=base_url.rstrip("/"))

    log_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip()
    if log_level:
        settings = replace(settings, log_level=_normalise_log_level(log_level))

    return settings
