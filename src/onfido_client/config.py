"""Client configuration from explicit values, environment variables or YAML."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

import yaml

from onfido_client import __version__
from onfido_client.common.exceptions import ConfigurationError

DEFAULT_ENDPOINT = "https://api.onfido.com/v3.6"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_CONCURRENT = 20
DEFAULT_USER_AGENT = f"onfido-client/{__version__}"


def _parse_number(name: str, value: Any, cast: Callable[[Any], Any]) -> Any:
    """Convert a numeric setting, reporting bad input as ConfigurationError."""
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"{name} must be a number, got {value!r}", cause=e
        ) from e


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one API client.

    Immutable once built; the transport shares it across concurrent calls.
    Build directly, or load with ClientConfig.from_env() / load_config().
    """

    api_token: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not self.api_token or not self.api_token.strip():
            raise ConfigurationError("api_token must not be empty")

        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"endpoint must be an absolute http(s) URL, got {self.endpoint!r}"
            )

        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )
        if self.max_concurrent < 1:
            raise ConfigurationError(
                f"max_concurrent must be at least 1, got {self.max_concurrent}"
            )

        # Normalized so relative paths join with a single slash
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"ClientConfig(endpoint={self.endpoint!r}, api_token='***', "
            f"timeout_seconds={self.timeout_seconds}, "
            f"max_concurrent={self.max_concurrent}, "
            f"user_agent={self.user_agent!r})"
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables.

        Required environment variables:
            ONFIDO_API_TOKEN: API token

        Optional environment variables (with defaults):
            ONFIDO_API_ENDPOINT: https://api.onfido.com/v3.6 (default)
            ONFIDO_TIMEOUT_SECONDS: 30 (default)
            ONFIDO_MAX_CONCURRENT: 20 (default)
            ONFIDO_USER_AGENT: onfido-client/<version> (default)

        Raises:
            ValueError: If ONFIDO_API_TOKEN is missing
            ConfigurationError: If a value is present but invalid
        """
        api_token = os.getenv("ONFIDO_API_TOKEN")
        if not api_token:
            raise ValueError("ONFIDO_API_TOKEN environment variable is required")

        return cls(
            api_token=api_token,
            endpoint=os.getenv("ONFIDO_API_ENDPOINT", DEFAULT_ENDPOINT),
            timeout_seconds=_parse_number(
                "ONFIDO_TIMEOUT_SECONDS",
                os.getenv("ONFIDO_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
                float,
            ),
            max_concurrent=_parse_number(
                "ONFIDO_MAX_CONCURRENT",
                os.getenv("ONFIDO_MAX_CONCURRENT", DEFAULT_MAX_CONCURRENT),
                int,
            ),
            user_agent=os.getenv("ONFIDO_USER_AGENT", DEFAULT_USER_AGENT),
        )

    @classmethod
    def load_config(cls, config_path: Optional[Path] = None) -> "ClientConfig":
        """Load configuration from a YAML file and environment variables.

        Configuration priority (highest to lowest):
        1. Environment variables (same names as from_env())
        2. YAML file, under the 'onfido:' key
        3. Dataclass defaults

        Example config.yaml:
            onfido:
              api_token: api_sandbox.xxxxx
              endpoint: https://api.eu.onfido.com/v3.6
              timeout_seconds: 15

        Raises:
            ValueError: If no API token is found in either source
            ConfigurationError: If a value is present but invalid
        """
        onfido_data: Dict[str, Any] = {}
        if config_path is not None and Path(config_path).exists():
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
            onfido_data = yaml_data.get("onfido", {}) or {}

        api_token = os.getenv("ONFIDO_API_TOKEN", onfido_data.get("api_token", ""))
        if not api_token:
            raise ValueError(
                "API token not configured. "
                "Set in config.yaml under 'onfido:' or via ONFIDO_API_TOKEN env var."
            )

        return cls(
            api_token=api_token,
            endpoint=os.getenv(
                "ONFIDO_API_ENDPOINT",
                onfido_data.get("endpoint", DEFAULT_ENDPOINT),
            ),
            timeout_seconds=_parse_number(
                "timeout_seconds",
                os.getenv(
                    "ONFIDO_TIMEOUT_SECONDS",
                    onfido_data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
                ),
                float,
            ),
            max_concurrent=_parse_number(
                "max_concurrent",
                os.getenv(
                    "ONFIDO_MAX_CONCURRENT",
                    onfido_data.get("max_concurrent", DEFAULT_MAX_CONCURRENT),
                ),
                int,
            ),
            user_agent=os.getenv(
                "ONFIDO_USER_AGENT",
                onfido_data.get("user_agent", DEFAULT_USER_AGENT),
            ),
        )
