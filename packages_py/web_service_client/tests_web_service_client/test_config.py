"""
Tests for config.py
Logic testing: Decision/Branch, Boundary
"""
import logging

import pytest

from web_service_client.config import (
    DEFAULT_APP_NAME,
    ServiceConfig,
    TimeoutConfig,
    normalize_timeout,
    resolve_config,
    validate_config,
)
from web_service_client.store.key_store import KeyStoreEntry


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self):
        validate_config(ServiceConfig(base_url="https://api.example.com"))

    # Error Path: missing base_url
    def test_missing_base_url(self):
        with pytest.raises(ValueError, match="base_url is required"):
            validate_config(ServiceConfig(base_url=""))

    # Error Path: unsupported scheme or missing host
    @pytest.mark.parametrize("url", ["ftp://api.example.com", "api.example.com", "https://"])
    def test_invalid_base_url(self, url):
        with pytest.raises(ValueError, match="Invalid base_url"):
            validate_config(ServiceConfig(base_url=url))


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_defaults(self):
        resolved = resolve_config(ServiceConfig(base_url="https://api.example.com"))
        assert resolved.app_name == DEFAULT_APP_NAME
        assert resolved.verify_ssl is True
        assert resolved.verify_url is None
        assert resolved.timeout.read == 120.0

    def test_app_name(self):
        resolved = resolve_config(ServiceConfig(base_url="https://api.example.com", app_name="Demo"))
        assert resolved.app_name == "Demo"

    # Decision: accept-any-certificate is opt-in and logged
    def test_accept_any_certificate(self, caplog):
        with caplog.at_level(logging.WARNING, logger="web_service_client.config"):
            resolved = resolve_config(
                ServiceConfig(base_url="https://api.example.com", accept_any_certificate=True)
            )
        assert resolved.verify_ssl is False
        assert "DISABLED" in caplog.text

    # Decision: environment switch
    @pytest.mark.parametrize("name", ["SSL_CERT_VERIFY", "NODE_TLS_REJECT_UNAUTHORIZED"])
    def test_env_disables_verification(self, monkeypatch, name):
        monkeypatch.setenv(name, "0")
        resolved = resolve_config(ServiceConfig(base_url="https://api.example.com"))
        assert resolved.verify_ssl is False

    # State: headers are copied
    def test_headers_copied(self):
        config = ServiceConfig(base_url="https://api.example.com", headers={"X-A": "1"})
        resolved = resolve_config(config)
        config.headers["X-B"] = "2"
        assert resolved.headers == {"X-A": "1"}


class TestNormalizeTimeout:
    def test_none(self):
        assert normalize_timeout(None) == TimeoutConfig()

    def test_number(self):
        timeout = normalize_timeout(5)
        assert timeout.connect == 5
        assert timeout.pool == 5

    def test_config_passthrough(self):
        timeout = TimeoutConfig(read=30.0)
        assert normalize_timeout(timeout) is timeout


class TestFromKeyStoreEntry:
    def test_uses_host_and_verify(self):
        entry = KeyStoreEntry(host="https://jira.example.com/", verify="rest/api/2/myself")
        config = ServiceConfig.from_key_store_entry(entry, app_name="Demo", accept_any_certificate=True)
        assert config.base_url == "https://jira.example.com/"
        assert config.verify_url == "rest/api/2/myself"
        assert config.app_name == "Demo"
        assert config.accept_any_certificate is True
