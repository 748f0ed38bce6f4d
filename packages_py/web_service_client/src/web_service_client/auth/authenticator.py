"""
Authenticators for web_service_client.

An authenticator runs once, when a service connects, and writes credentials
into the default headers of the service's transport handle. Header
authenticators keep no state and can be applied any number of times with the
same result.
"""
import base64
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Tuple

import httpx

from ..diagnostics import mask_sensitive

if TYPE_CHECKING:
    from ..core.base_service import WebService

logger = logging.getLogger("web_service_client.auth")


def encode_credentials(login: str, password: str, encoding: str = "utf-8") -> str:
    """Return base64(login:password) in the given text encoding."""
    return base64.b64encode(f"{login}:{password}".encode(encoding)).decode("ascii")


class Authenticator(ABC):
    """Authenticator interface."""

    @abstractmethod
    async def authenticate(self, service: "WebService", client: httpx.AsyncClient) -> None:
        """Apply credentials to ``client`` on behalf of ``service``."""
        ...


class HeaderAuthenticator(Authenticator):
    """Authenticator that writes exactly one default header."""

    @abstractmethod
    def header(self) -> Tuple[str, str]:
        """Return the (name, value) pair to set."""
        ...

    async def authenticate(self, service: "WebService", client: httpx.AsyncClient) -> None:
        name, value = self.header()
        logger.debug(
            f"{type(self).__name__}.authenticate: {name}={mask_sensitive(value)}"
        )
        client.headers[name] = value


class ApiKeyAuthenticator(HeaderAuthenticator):
    """Sends an API key in a caller-named header."""

    def __init__(self, name: str, value: str):
        self._name = name
        self._value = value

    def header(self) -> Tuple[str, str]:
        return self._name, self._value


class TokenAuthenticator(ApiKeyAuthenticator):
    """Sends a raw token in a caller-named header."""


class BasicAuthenticator(HeaderAuthenticator):
    """``Authorization: Basic base64(login:password)``."""

    def __init__(self, login: str, password: str, encoding: str = "utf-8"):
        self._login = login
        self._password = password
        self._encoding = encoding

    def header(self) -> Tuple[str, str]:
        return "Authorization", f"Basic {encode_credentials(self._login, self._password, self._encoding)}"


class BasicHeaderAuthenticator(HeaderAuthenticator):
    """base64(login:password) without scheme, in a caller-named header."""

    def __init__(self, header_name: str, login: str, password: str, encoding: str = "utf-8"):
        self._header_name = header_name
        self._login = login
        self._password = password
        self._encoding = encoding

    def header(self) -> Tuple[str, str]:
        return self._header_name, encode_credentials(self._login, self._password, self._encoding)


class BasicTokenAuthenticator(HeaderAuthenticator):
    """``Authorization: Basic <token>`` for an already encoded token."""

    def __init__(self, token: str):
        self._token = token

    def header(self) -> Tuple[str, str]:
        return "Authorization", f"Basic {self._token}"


class BearerAuthenticator(HeaderAuthenticator):
    """``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self._token = token

    def header(self) -> Tuple[str, str]:
        return "Authorization", f"Bearer {self._token}"


class MultiAuthenticator(Authenticator):
    """Applies child authenticators in order; later header writes win."""

    def __init__(self, *authenticators: Authenticator):
        self._authenticators = tuple(authenticators)

    @property
    def authenticators(self) -> Tuple[Authenticator, ...]:
        return self._authenticators

    async def authenticate(self, service: "WebService", client: httpx.AsyncClient) -> None:
        for authenticator in self._authenticators:
            await authenticator.authenticate(service, client)
