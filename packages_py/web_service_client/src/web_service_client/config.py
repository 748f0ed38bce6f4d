"""
Configuration for web_service_client.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Union
from urllib.parse import urlparse

if TYPE_CHECKING:
    from .store.key_store import KeyStoreEntry

logger = logging.getLogger("web_service_client.config")

DEFAULT_APP_NAME = "WebServices"
DEFAULT_TIMEOUT_SECONDS = 120.0


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = DEFAULT_TIMEOUT_SECONDS
    read: float = DEFAULT_TIMEOUT_SECONDS
    write: float = DEFAULT_TIMEOUT_SECONDS
    pool: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class ServiceConfig:
    """Connection settings for one remote endpoint.

    ``accept_any_certificate`` switches off server certificate validation.
    It exists for self-hosted servers with private certificates and must be
    turned on explicitly.
    """

    base_url: str
    app_name: Optional[str] = None
    verify_url: Optional[str] = None
    accept_any_certificate: bool = False
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Union[TimeoutConfig, float, None] = None

    @classmethod
    def from_key_store_entry(
        cls,
        entry: "KeyStoreEntry",
        app_name: Optional[str] = None,
        **kwargs,
    ) -> "ServiceConfig":
        """Build a config from a credential store record."""
        return cls(
            base_url=entry.host,
            app_name=app_name,
            verify_url=entry.verify,
            **kwargs,
        )


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class ResolvedConfig:
    """Service configuration with defaults applied."""

    base_url: str
    app_name: str
    verify_url: Optional[str]
    verify_ssl: bool
    headers: Dict[str, str]
    timeout: TimeoutConfig


def _is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout, pool=timeout)
    return timeout


def validate_config(config: ServiceConfig) -> None:
    """Validate service configuration."""
    if not config.base_url:
        raise ValueError("base_url is required")

    parsed = urlparse(config.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid base_url: {config.base_url}")


def resolve_config(config: ServiceConfig) -> ResolvedConfig:
    """Resolve service configuration with defaults."""
    validate_config(config)

    accept_any = config.accept_any_certificate or _is_ssl_verify_disabled_by_env()
    if accept_any:
        logger.warning(
            f"resolve_config: server certificate validation is DISABLED for {config.base_url}"
        )

    return ResolvedConfig(
        base_url=config.base_url,
        app_name=config.app_name or DEFAULT_APP_NAME,
        verify_url=config.verify_url,
        verify_ssl=not accept_any,
        headers=dict(config.headers),
        timeout=normalize_timeout(config.timeout),
    )
