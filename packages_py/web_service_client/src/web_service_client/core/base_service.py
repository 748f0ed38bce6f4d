"""
Base web service using httpx.

``WebService`` owns one ``httpx.AsyncClient`` per remote endpoint. The
client is built, configured and authenticated in ``connect()`` and only
published once all of that succeeded, so a service is either fully connected
or not connected at all.
"""
import asyncio
import io
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    AsyncIterator,
    Dict,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

import httpx

from ..config import ResolvedConfig, ServiceConfig, resolve_config
from ..diagnostics import print_request, print_response
from ..exceptions import (
    ArgumentNullError,
    ArgumentRequestUriError,
    WebServiceAuthenticationError,
    WebServiceError,
    WebServiceNotConnectedError,
)
from ..types import FileUpload, HttpMethod, RequestContent, RequestDescriptor
from .url_builder import combine_url

if TYPE_CHECKING:
    from ..auth.authenticator import Authenticator

logger = logging.getLogger("web_service_client.base_service")

ATLASSIAN_TOKEN_HEADER = {"X-Atlassian-Token": "nocheck"}

S = TypeVar("S", bound="WebService")


class WebService:
    """Base class for web service clients.

    Subclasses declare endpoint methods on top of the verb operations. A
    subclass may set ``authentication_test_url`` to have ``connect()`` probe
    that endpoint and fail when the credentials are rejected.

    Example:
        class DemoService(WebService):
            authentication_test_url = "rest/api/myself"

            async def get_item(self, key: str) -> bytes:
                return await self.get_bytes(self.combine_url("rest/api/item", key), label="get_item")

        async with DemoService(ServiceConfig(base_url="https://demo"), BearerAuthenticator(token)) as svc:
            data = await svc.get_item("A-1")
    """

    authentication_test_url: Optional[str] = None

    combine_url = staticmethod(combine_url)

    def __init__(
        self,
        config: ServiceConfig,
        authenticator: Optional["Authenticator"] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config: ResolvedConfig = resolve_config(config)
        self._authenticator = authenticator
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._connect_lock = asyncio.Lock()

    @classmethod
    async def open(cls: Type[S], *args, **kwargs) -> S:
        """Construct and connect a service in one step."""
        service = cls(*args, **kwargs)
        await service.connect()
        return service

    @property
    def host(self) -> str:
        """Base address of the web service."""
        return self._config.base_url

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        """True while the transport handle is alive."""
        return self._client is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _create_client(self) -> httpx.AsyncClient:
        timeout = self._config.timeout
        headers = {"User-Agent": self._config.app_name}
        headers.update(self._config.headers)
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=headers,
            cookies=httpx.Cookies(),
            verify=self._config.verify_ssl,
            timeout=httpx.Timeout(
                connect=timeout.connect,
                read=timeout.read,
                write=timeout.write,
                pool=timeout.pool,
            ),
            follow_redirects=True,
            transport=self._transport,
        )

    def initialize_client(self, client: httpx.AsyncClient) -> None:
        """Hook for subclasses to add default headers before authentication."""

    async def connect(self) -> None:
        """Create, configure and authenticate the transport handle.

        Does nothing when already connected. On failure the half-built
        handle is closed and the service stays disconnected. Concurrent
        calls are serialized so only one handle is ever built.
        """
        async with self._connect_lock:
            if self._client is not None:
                return

            client = self._create_client()
            try:
                await self._setup_client(client)
            except BaseException:
                await client.aclose()
                raise

            self._client = client
        logger.info(f"WebService.connect: connected to {self._config.base_url}")

    async def _setup_client(self, client: httpx.AsyncClient) -> None:
        self.initialize_client(client)
        try:
            if self._authenticator is not None:
                logger.debug(
                    f"WebService.connect: applying {type(self._authenticator).__name__}"
                )
                await self._authenticator.authenticate(self, client)

            verify_url = self._config.verify_url or self.authentication_test_url
            if verify_url:
                await self._test_authentication(client, verify_url)
        except httpx.RequestError as e:
            raise WebServiceError(
                str(e) or type(e).__name__, self._config.base_url, label="connect"
            ) from e

    async def _test_authentication(self, client: httpx.AsyncClient, verify_url: str) -> None:
        logger.debug(f"WebService.connect: verifying authentication against {verify_url}")
        response = await client.get(verify_url)
        if not response.is_success:
            raise WebServiceAuthenticationError(
                "Authentication failed",
                str(response.request.url),
                response.status_code,
                response.reason_phrase,
                "connect",
            )

    async def close(self) -> None:
        """Release the transport handle. Safe to call more than once."""
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()
            logger.info(f"WebService.close: disconnected from {self._config.base_url}")

    async def __aenter__(self: S) -> S:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Error classification
    # ------------------------------------------------------------------

    async def error_check(self, response: httpx.Response, label: str) -> None:
        """Route unsuccessful responses to ``error_handling``."""
        if not response.is_success:
            await self.error_handling(response, label)

    async def error_handling(self, response: httpx.Response, label: str) -> None:
        """Raise a ``WebServiceError`` for an unsuccessful response."""
        try:
            await response.aread()
            text = response.text or None
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.debug(f"WebService.error_handling: could not read error body: {e}")
            text = None
        raise WebServiceError(
            text,
            str(response.request.url),
            response.status_code,
            response.reason_phrase,
            label,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _require_client(self, label: str) -> httpx.AsyncClient:
        if self._client is None:
            raise WebServiceNotConnectedError(label)
        return self._client

    async def _send(
        self,
        method: HttpMethod,
        uri: str,
        *,
        label: Optional[str] = None,
        content: RequestContent = None,
        files: Optional[List[Tuple[str, Tuple[str, object]]]] = None,
        headers: Optional[Dict[str, str]] = None,
        check: bool = True,
    ) -> httpx.Response:
        ArgumentRequestUriError.raise_if_blank(uri, "uri")
        request = RequestDescriptor(
            method=method,
            uri=str(uri),
            label=label or method,
            has_body=content is not None or files is not None,
        )
        client = self._require_client(request.label)

        logger.debug(
            f"WebService._send: method={request.method}, uri={request.uri}, "
            f"label={request.label}, has_body={request.has_body}"
        )
        print_request(logger, method, request.uri, {**client.headers, **(headers or {})}, content)

        try:
            response = await client.request(
                method,
                request.uri,
                content=content,
                files=files,
                headers=headers,
            )
        except httpx.RequestError as e:
            raise WebServiceError(
                str(e) or type(e).__name__, request.uri, label=request.label
            ) from e

        print_response(logger, str(response.url), response.status_code, response.reason_phrase, response.content)

        if check:
            await self.error_check(response, request.label)
        return response

    @asynccontextmanager
    async def _open_stream(
        self,
        uri: str,
        *,
        label: Optional[str] = None,
        check: bool = True,
    ) -> AsyncIterator[httpx.Response]:
        ArgumentRequestUriError.raise_if_blank(uri, "uri")
        label = label or "GET"
        client = self._require_client(label)

        logger.debug(f"WebService._open_stream: uri={uri}, label={label}")
        try:
            async with client.stream("GET", str(uri)) as response:
                if check:
                    await self.error_check(response, label)
                yield response
        except httpx.RequestError as e:
            raise WebServiceError(str(e) or type(e).__name__, str(uri), label=label) from e

    @staticmethod
    def _multipart(files: Iterable[FileUpload]) -> List[Tuple[str, Tuple[str, object]]]:
        ArgumentNullError.raise_if_none(files, "files")
        parts = [("file", (key, stream)) for key, stream in files]
        if not parts:
            raise ArgumentNullError("Argument is empty", "files")
        return parts

    # ------------------------------------------------------------------
    # GET
    # ------------------------------------------------------------------

    async def get_bytes(self, uri: str, *, label: Optional[str] = None) -> bytes:
        """GET ``uri`` and return the response body."""
        response = await self._send("GET", uri, label=label)
        return response.content

    async def get_string(self, uri: str, *, label: Optional[str] = None) -> str:
        """GET ``uri`` and return the response body as text."""
        response = await self._send("GET", uri, label=label)
        return response.text

    async def get_stream(self, uri: str, *, label: Optional[str] = None) -> io.BytesIO:
        """GET ``uri`` and return the response body as a seekable stream."""
        response = await self._send("GET", uri, label=label)
        return io.BytesIO(response.content)

    async def found(self, uri: str, *, label: Optional[str] = None) -> bool:
        """GET ``uri`` and report whether the resource exists.

        A 404 returns False; any other failure raises.
        """
        response = await self._send("GET", uri, label=label, check=False)
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        await self.error_check(response, label or "GET")
        return True

    async def download(
        self,
        uri: str,
        file_path: Union[str, Path],
        *,
        label: Optional[str] = None,
    ) -> None:
        """GET ``uri`` and stream the response body into ``file_path``.

        The body is written to a sibling ``.part`` file that replaces
        ``file_path`` only once the download completed.
        """
        target = Path(file_path)
        partial = target.with_name(f"{target.name}.part")
        try:
            async with self._open_stream(uri, label=label) as response:
                with partial.open("wb") as file:
                    async for chunk in response.aiter_bytes():
                        file.write(chunk)
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        partial.replace(target)

    async def download_location(
        self,
        uri: str,
        file_path: Union[str, Path],
        *,
        label: Optional[str] = None,
    ) -> None:
        """Resolve the final location of ``uri`` after redirects, then download it."""
        async with self._open_stream(uri, label=label, check=False) as response:
            location = str(response.url)
        logger.debug(f"WebService.download_location: {uri} -> {location}")
        await self.download(location, file_path, label=label)

    # ------------------------------------------------------------------
    # PUT / POST / PATCH
    # ------------------------------------------------------------------

    @staticmethod
    def _content_headers(content_type: Optional[str]) -> Optional[Dict[str, str]]:
        return {"Content-Type": content_type} if content_type else None

    async def put(
        self,
        uri: str,
        content: RequestContent = None,
        *,
        content_type: Optional[str] = None,
        label: Optional[str] = None,
    ) -> bytes:
        """PUT ``content`` to ``uri`` and return the response body."""
        response = await self._send(
            "PUT", uri, label=label, content=content, headers=self._content_headers(content_type)
        )
        return response.content

    async def put_files(
        self,
        uri: str,
        files: Iterable[FileUpload],
        *,
        label: Optional[str] = None,
    ) -> bytes:
        """PUT ``files`` to ``uri`` as a multipart form."""
        response = await self._send(
            "PUT", uri, label=label, files=self._multipart(files), headers=dict(ATLASSIAN_TOKEN_HEADER)
        )
        return response.content

    async def post(
        self,
        uri: str,
        content: RequestContent = None,
        *,
        content_type: Optional[str] = None,
        label: Optional[str] = None,
    ) -> bytes:
        """POST ``content`` (or nothing) to ``uri`` and return the response body."""
        response = await self._send(
            "POST", uri, label=label, content=content, headers=self._content_headers(content_type)
        )
        return response.content

    async def post_files(
        self,
        uri: str,
        files: Iterable[FileUpload],
        *,
        label: Optional[str] = None,
    ) -> bytes:
        """POST ``files`` to ``uri`` as a multipart form."""
        response = await self._send(
            "POST", uri, label=label, files=self._multipart(files), headers=dict(ATLASSIAN_TOKEN_HEADER)
        )
        return response.content

    async def patch(
        self,
        uri: str,
        content: RequestContent = None,
        *,
        content_type: Optional[str] = None,
        label: Optional[str] = None,
    ) -> bytes:
        """PATCH ``uri`` with ``content`` and return the response body."""
        response = await self._send(
            "PATCH", uri, label=label, content=content, headers=self._content_headers(content_type)
        )
        return response.content

    # ------------------------------------------------------------------
    # DELETE
    # ------------------------------------------------------------------

    async def delete(self, uri: str, *, label: Optional[str] = None) -> bytes:
        """DELETE ``uri`` and return the response body."""
        response = await self._send("DELETE", uri, label=label)
        return response.content

    async def delete_if_found(self, uri: str, *, label: Optional[str] = None) -> bool:
        """DELETE ``uri``; a 404 returns False instead of raising."""
        response = await self._send("DELETE", uri, label=label, check=False)
        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        await self.error_check(response, label or "DELETE")
        return True
