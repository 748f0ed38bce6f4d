"""
JSON adapter for web_service_client.

Adds typed request/response bodies on top of ``WebService``. Every typed
verb looks up a serializer for the declared body type, sends, runs the
shared error check and deserializes with the serializer of the declared
response type. The registry is owned by the caller.
"""
import logging
from typing import TYPE_CHECKING, Any, Optional, Type, TypeVar

import httpx

from ..config import ServiceConfig
from ..core.base_service import WebService
from ..exceptions import ArgumentNullError, ArgumentRequestUriError, WebServiceError
from ..serialization.registry import SerializerRegistry
from ..types import HttpMethod

if TYPE_CHECKING:
    from ..auth.authenticator import Authenticator

logger = logging.getLogger("web_service_client.json_service")

JSON_CONTENT_TYPE = "application/json"

T = TypeVar("T")


class JsonService(WebService):
    """Web service speaking JSON through a typed-serializer registry."""

    def __init__(
        self,
        config: ServiceConfig,
        serializers: SerializerRegistry,
        authenticator: Optional["Authenticator"] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config, authenticator, transport=transport)
        self._serializers = serializers

    @property
    def serializers(self) -> SerializerRegistry:
        return self._serializers

    def initialize_client(self, client: httpx.AsyncClient) -> None:
        client.headers["Accept"] = JSON_CONTENT_TYPE

    async def send_json(
        self,
        method: HttpMethod,
        uri: str,
        *,
        body: Any = None,
        body_type: Any = None,
        response_type: Any = None,
        label: Optional[str] = None,
    ) -> Any:
        """Send ``body`` as JSON and deserialize the response as ``response_type``.

        ``body_type`` defaults to ``type(body)``. With no ``response_type``
        the response body is discarded. An empty response body yields None.
        """
        ArgumentRequestUriError.raise_if_blank(uri, "uri")
        label = label or method

        # Resolve both serializers before any I/O so a missing registration
        # fails pre-flight.
        request_serializer = (
            self._serializers.lookup(body_type if body_type is not None else type(body))
            if body is not None
            else None
        )
        response_serializer = (
            self._serializers.lookup(response_type) if response_type is not None else None
        )

        logger.debug(
            f"JsonService.send_json: method={method}, uri={uri}, label={label}, "
            f"body_type={type(body).__name__ if body_type is None else body_type!r}, "
            f"response_type={response_type!r}"
        )

        content = None
        headers = None
        if request_serializer is not None:
            content = request_serializer.serialize(body)
            headers = {"Content-Type": JSON_CONTENT_TYPE}

        response = await self._send(method, uri, label=label, content=content, headers=headers)

        if response_serializer is None or not response.content.strip():
            return None

        try:
            return response_serializer.deserialize(response.content)
        except ValueError as e:
            raise WebServiceError(
                f"Invalid response body for {response_type!r}: {e}",
                str(response.request.url),
                response.status_code,
                response.reason_phrase,
                label,
            ) from e

    async def get_json(
        self, uri: str, response_type: Type[T], *, label: Optional[str] = None
    ) -> Optional[T]:
        """GET ``uri`` and deserialize the body as ``response_type``."""
        return await self.send_json("GET", uri, response_type=response_type, label=label)

    async def put_json(
        self,
        uri: str,
        body: Any,
        response_type: Optional[Type[T]] = None,
        *,
        body_type: Any = None,
        label: Optional[str] = None,
    ) -> Optional[T]:
        """PUT ``body`` to ``uri``."""
        ArgumentNullError.raise_if_none(body, "body")
        return await self.send_json(
            "PUT", uri, body=body, body_type=body_type, response_type=response_type, label=label
        )

    async def post_json(
        self,
        uri: str,
        body: Any,
        response_type: Optional[Type[T]] = None,
        *,
        body_type: Any = None,
        label: Optional[str] = None,
    ) -> Optional[T]:
        """POST ``body`` to ``uri``."""
        ArgumentNullError.raise_if_none(body, "body")
        return await self.send_json(
            "POST", uri, body=body, body_type=body_type, response_type=response_type, label=label
        )

    async def patch_json(
        self,
        uri: str,
        body: Any,
        response_type: Optional[Type[T]] = None,
        *,
        body_type: Any = None,
        label: Optional[str] = None,
    ) -> Optional[T]:
        """PATCH ``uri`` with ``body``."""
        ArgumentNullError.raise_if_none(body, "body")
        return await self.send_json(
            "PATCH", uri, body=body, body_type=body_type, response_type=response_type, label=label
        )

    async def delete_json(
        self,
        uri: str,
        response_type: Optional[Type[T]] = None,
        *,
        label: Optional[str] = None,
    ) -> Optional[T]:
        """DELETE ``uri``, optionally deserializing the response."""
        return await self.send_json("DELETE", uri, response_type=response_type, label=label)
