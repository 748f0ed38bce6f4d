"""
Shared fixtures for web_service_client tests.
"""
import pytest
import respx

import httpx

from web_service_client.config import ServiceConfig

BASE_URL = "https://api.example.com"


@pytest.fixture(autouse=True)
def clear_ssl_env(monkeypatch):
    """Certificate checking must not depend on the developer's shell."""
    monkeypatch.delenv("SSL_CERT_VERIFY", raising=False)
    monkeypatch.delenv("NODE_TLS_REJECT_UNAUTHORIZED", raising=False)


@pytest.fixture
def router():
    """respx router used as the transport of the service under test."""
    return respx.MockRouter()


@pytest.fixture
def transport(router):
    """Explicit mock transport (avoids respx auto-patching)."""
    return httpx.MockTransport(router.async_handler)


@pytest.fixture
def service_config():
    """Sample ServiceConfig for testing."""
    return ServiceConfig(base_url=BASE_URL)
