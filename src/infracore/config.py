"""Configuration management for the infracore client."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import (
    DEFAULT_ENDPOINT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_USER_AGENT,
)


@dataclass
class APIConfig:
    """API connection configuration."""

    token: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: int = 30
    verify_ssl: bool = True
    max_connections: int = 20  # Maximum total connections
    max_keepalive: int = 10  # Maximum keep-alive connections
    max_retries: int = DEFAULT_MAX_RETRIES
    poll_interval: float = DEFAULT_POLL_INTERVAL  # Seconds between action refreshes
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"
    file: Path | None = None


@dataclass
class ClientConfig:
    """
    Complete configuration for the infracore client.

    This combines all configuration sections.
    """

    api: APIConfig | None = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "ClientConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            ClientConfig instance
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        try:
            api_data = data.get("api")
            api = APIConfig(**api_data) if api_data else None

            logging_data = dict(data.get("logging") or {})
            if logging_data.get("file"):
                logging_data["file"] = Path(logging_data["file"])
            logging = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

        return cls(api=api, logging=logging)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "api": self.api.__dict__ if self.api else None,
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            HCLOUD_TOKEN: API token (the api section is omitted when unset)
            HCLOUD_ENDPOINT: API base URL
            HCLOUD_TIMEOUT: Request timeout in seconds (default: 30)
            HCLOUD_POLL_INTERVAL: Seconds between action refreshes (default: 0.5)
            LOG_LEVEL: Logging level (default: INFO)
            LOG_FORMAT: console or json (default: console)

        Returns:
            ClientConfig instance

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        api_config = None
        token = os.environ.get("HCLOUD_TOKEN", "")
        if token:
            try:
                timeout = int(os.environ.get("HCLOUD_TIMEOUT", "30"))
                poll_interval = float(
                    os.environ.get("HCLOUD_POLL_INTERVAL", str(DEFAULT_POLL_INTERVAL))
                )
            except ValueError as e:
                raise ValueError(f"Invalid numeric value in environment: {e}") from e

            verify_ssl_str = os.environ.get("HCLOUD_VERIFY_SSL", "true").lower()
            verify_ssl = verify_ssl_str not in ("false", "0", "no", "off")

            api_config = APIConfig(
                token=token,
                endpoint=os.environ.get("HCLOUD_ENDPOINT", DEFAULT_ENDPOINT),
                timeout=timeout,
                verify_ssl=verify_ssl,
                poll_interval=poll_interval,
            )

        logging_config = LoggingConfig(
            level=os.environ.get("LOG_LEVEL", "INFO"),
            format=os.environ.get("LOG_FORMAT", "console"),
        )

        return cls(api=api_config, logging=logging_config)


def load_config(config_file: Path | None = None) -> ClientConfig:
    """
    Load configuration from file or environment variables.

    Args:
        config_file: Optional path to YAML config file

    Returns:
        ClientConfig instance

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        return ClientConfig.from_file(config_file)
    return ClientConfig.from_env()
