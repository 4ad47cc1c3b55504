"""
Tests for environment-based configuration.
"""

import pytest

from api.config import BackendConfig
from catalog.config import ClientConfig, ConfigError


class TestClientConfig:
    """Test cases for ClientConfig."""

    def test_backend_url_default(self, monkeypatch):
        monkeypatch.delenv("CATALOG_BACKEND_URL", raising=False)
        assert ClientConfig.get_backend_url() == "http://localhost:4000"

    def test_backend_url_strips_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("CATALOG_BACKEND_URL", "https://catalog.example.com/")
        assert ClientConfig.get_backend_url() == "https://catalog.example.com"

    def test_timeout_unset(self, monkeypatch):
        monkeypatch.delenv("CATALOG_REQUEST_TIMEOUT", raising=False)
        assert ClientConfig.get_request_timeout() is None

    def test_timeout_parsed(self, monkeypatch):
        monkeypatch.setenv("CATALOG_REQUEST_TIMEOUT", "2.5")
        assert ClientConfig.get_request_timeout() == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, monkeypatch, value):
        monkeypatch.setenv("CATALOG_REQUEST_TIMEOUT", value)
        with pytest.raises(ConfigError):
            ClientConfig.get_request_timeout()

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("CATALOG_LOG_LEVEL", "debug")
        assert ClientConfig.get_log_level() == "DEBUG"


class TestBackendConfig:
    """Test cases for BackendConfig."""

    def test_port_default(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert BackendConfig.get_port() == 4000

    @pytest.mark.parametrize("value", ["http", "0", "70000"])
    def test_invalid_port(self, monkeypatch, value):
        monkeypatch.setenv("PORT", value)
        with pytest.raises(ConfigError):
            BackendConfig.get_port()

    @pytest.mark.parametrize("value,expected", [("", True), ("true", True), ("0", False), ("No", False)])
    def test_seed_demo_data(self, monkeypatch, value, expected):
        monkeypatch.setenv("CATALOG_SEED_DEMO", value)
        assert BackendConfig.seed_demo_data() is expected

    def test_invalid_seed_flag(self, monkeypatch):
        monkeypatch.setenv("CATALOG_SEED_DEMO", "maybe")
        with pytest.raises(ConfigError):
            BackendConfig.seed_demo_data()
