"""
Type definitions for web_service_client.
"""
from dataclasses import dataclass
from typing import Any, BinaryIO, Literal, Protocol, Tuple, Union


# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# (name, value) pair for query strings. A value of None drops the entry.
QueryEntry = Tuple[str, Any]

# (logical key, stream) pair for multipart uploads
FileUpload = Tuple[str, Union[BinaryIO, bytes]]

# Request body accepted by the raw verbs
RequestContent = Union[str, bytes, None]


@dataclass(frozen=True)
class RequestDescriptor:
    """Describes one logical call for logging and error context."""

    method: HttpMethod
    uri: str
    label: str
    has_body: bool = False


class TypeSerializer(Protocol):
    """Serializer protocol for one declared type."""

    def serialize(self, obj: Any) -> bytes:
        """Serialize an instance to wire bytes."""
        ...

    def deserialize(self, data: bytes) -> Any:
        """Deserialize wire bytes to an instance."""
        ...
