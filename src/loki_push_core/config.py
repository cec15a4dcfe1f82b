"""Demo configuration loaded from a JSON file."""

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import LokiConfigurationError
from .models import Credentials

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LOKI_DEMO_CONFIG"
DEFAULT_CONFIG_PATH = "config.json"

# JSON key -> dataclass field
_KEYS = {
    "lokiAlloyUrl": "loki_alloy_url",
    "lokiCloudUrl": "loki_cloud_url",
    "grafanaUsername": "grafana_username",
    "grafanaPassword": "grafana_password",
    "eventLogSource": "event_log_source",
    "logFilePath": "log_file_path",
}


@dataclass(frozen=True)
class DemoConfig:
    loki_alloy_url: str = "http://localhost:3100"
    loki_cloud_url: str = ""
    grafana_username: str = ""
    grafana_password: str = ""
    event_log_source: str = "LokiDemoApp"
    log_file_path: str = "logs/loki-demo.log"

    @classmethod
    def from_dict(cls, d: dict) -> "DemoConfig":
        values = {field: d[key] for key, field in _KEYS.items() if d.get(key) is not None}
        for field, value in values.items():
            if not isinstance(value, str):
                raise LokiConfigurationError(f"Config value for {field} must be a string")
        return cls(**values)

    def to_dict(self) -> dict:
        return {key: getattr(self, field) for key, field in _KEYS.items()}

    @property
    def cloud_credentials(self) -> Optional[Credentials]:
        if not self.grafana_username or not self.grafana_password:
            return None
        return Credentials(self.grafana_username, self.grafana_password)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> DemoConfig:
    """Load DemoConfig from *path*.

    The path can be overridden via the ``LOKI_DEMO_CONFIG`` environment variable.
    """
    path = os.environ.get(CONFIG_ENV_VAR, path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise LokiConfigurationError(f"Config file {path} not found") from e
    except ValueError as e:
        raise LokiConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise LokiConfigurationError(f"Config file {path} must contain a JSON object")

    logger.info("Loaded config from %s", path)
    return DemoConfig.from_dict(data)


def validate_alloy(config: DemoConfig) -> str:
    """Return the Alloy URL, or raise with guidance if it is unusable."""
    url = config.loki_alloy_url
    if not url:
        raise LokiConfigurationError(
            "Alloy URL is missing. Set lokiAlloyUrl in config.json "
            "(example: http://localhost:1337)"
        )
    if not url.startswith(("http://", "https://")):
        raise LokiConfigurationError(
            "Invalid Alloy URL. lokiAlloyUrl should start with 'http://' or 'https://' "
            "(example: http://localhost:1337)"
        )
    return url


def validate_cloud(config: DemoConfig) -> tuple[str, Credentials]:
    """Return the Grafana Cloud URL and credentials, or raise with guidance."""
    credentials = config.cloud_credentials
    if credentials is None:
        raise LokiConfigurationError(
            "Grafana Cloud credentials are missing. Set grafanaUsername to your stack ID "
            "and grafanaPassword to your API key in config.json"
        )
    if not config.loki_cloud_url.startswith("https://"):
        raise LokiConfigurationError(
            "Invalid Grafana Cloud URL. lokiCloudUrl should start with 'https://' "
            "(example: https://logs-prod-xxx.grafana.net)"
        )
    return config.loki_cloud_url, credentials
