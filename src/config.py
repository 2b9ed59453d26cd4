"""Runtime settings read from the process environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from src.completion.bridge import DEFAULT_ENDPOINT_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    api_key: str
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from OPENAI_API_KEY, COMPLETION_API_URL,
        COMPLETION_TIMEOUT and LOG_LEVEL.
        """
        api_key = os.environ.get("OPENAI_API_KEY", "")
        if not api_key:
            logger.warning("OPENAI_API_KEY is not set; completion calls will be rejected upstream")

        raw_timeout = os.environ.get("COMPLETION_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigError(f"COMPLETION_TIMEOUT must be a number, got {raw_timeout!r}") from exc
        if timeout <= 0:
            raise ConfigError(f"COMPLETION_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            api_key=api_key,
            endpoint_url=os.environ.get("COMPLETION_API_URL", DEFAULT_ENDPOINT_URL),
            timeout=timeout,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
