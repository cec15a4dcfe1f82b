"""Tests for demo configuration loading."""

import json

import pytest

from loki_push_core.config import (
    CONFIG_ENV_VAR,
    DemoConfig,
    load_config,
    validate_alloy,
    validate_cloud,
)
from loki_push_core.exceptions import LokiConfigurationError


CONFIG_DATA = {
    "lokiAlloyUrl": "http://localhost:1337",
    "lokiCloudUrl": "https://logs-prod-025.grafana.net",
    "grafanaUsername": "123456",
    "grafanaPassword": "api-key",
    "eventLogSource": "LokiDemoApp",
    "logFilePath": "logs/demo.log",
}


class TestDemoConfig:
    """Test DemoConfig dataclass."""

    def test_from_dict(self) -> None:
        config = DemoConfig.from_dict(CONFIG_DATA)
        assert config.loki_alloy_url == "http://localhost:1337"
        assert config.grafana_username == "123456"
        assert config.log_file_path == "logs/demo.log"

    def test_from_dict_defaults(self) -> None:
        config = DemoConfig.from_dict({})
        assert config == DemoConfig()

    def test_from_dict_null_uses_default(self) -> None:
        config = DemoConfig.from_dict({"eventLogSource": None})
        assert config.event_log_source == "LokiDemoApp"

    def test_from_dict_rejects_non_string(self) -> None:
        with pytest.raises(LokiConfigurationError, match="loki_alloy_url"):
            DemoConfig.from_dict({"lokiAlloyUrl": 1337})

    def test_roundtrip(self) -> None:
        assert DemoConfig.from_dict(CONFIG_DATA).to_dict() == CONFIG_DATA

    def test_cloud_credentials(self) -> None:
        credentials = DemoConfig.from_dict(CONFIG_DATA).cloud_credentials
        assert credentials.as_auth() == ("123456", "api-key")

    def test_cloud_credentials_missing(self) -> None:
        assert DemoConfig(grafana_username="123456").cloud_credentials is None


class TestLoadConfig:
    """Test load_config function."""

    def test_load(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(CONFIG_DATA), encoding="utf-8")
        assert load_config(str(path)) == DemoConfig.from_dict(CONFIG_DATA)

    def test_env_override(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"logFilePath": "x.log"}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config("does-not-exist.json").log_file_path == "x.log"

    def test_missing_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        with pytest.raises(LokiConfigurationError, match="not found"):
            load_config(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LokiConfigurationError, match="not valid JSON"):
            load_config(str(path))

    def test_not_an_object(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(LokiConfigurationError, match="JSON object"):
            load_config(str(path))


class TestValidate:
    """Test sink-specific config validation."""

    def test_alloy_ok(self) -> None:
        assert validate_alloy(DemoConfig.from_dict(CONFIG_DATA)) == "http://localhost:1337"

    def test_alloy_missing(self) -> None:
        with pytest.raises(LokiConfigurationError, match="missing"):
            validate_alloy(DemoConfig(loki_alloy_url=""))

    def test_alloy_bad_scheme(self) -> None:
        with pytest.raises(LokiConfigurationError, match="http://"):
            validate_alloy(DemoConfig(loki_alloy_url="localhost:1337"))

    def test_cloud_ok(self) -> None:
        url, credentials = validate_cloud(DemoConfig.from_dict(CONFIG_DATA))
        assert url == "https://logs-prod-025.grafana.net"
        assert credentials.username == "123456"

    def test_cloud_missing_credentials(self) -> None:
        config = DemoConfig(loki_cloud_url="https://logs-prod-025.grafana.net")
        with pytest.raises(LokiConfigurationError, match="credentials are missing"):
            validate_cloud(config)

    def test_cloud_requires_https(self) -> None:
        config = DemoConfig(
            loki_cloud_url="http://logs-prod-025.grafana.net",
            grafana_username="123456",
            grafana_password="api-key",
        )
        with pytest.raises(LokiConfigurationError, match="https://"):
            validate_cloud(config)
