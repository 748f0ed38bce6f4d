"""
Typed serialization for web_service_client.
"""
from .converters import LenientDatetime, parse_lenient_datetime
from .registry import SerializerRegistry
from .serializers import JsonSerializer, PydanticSerializer

__all__ = [
    "SerializerRegistry",
    "JsonSerializer",
    "PydanticSerializer",
    "LenientDatetime",
    "parse_lenient_datetime",
]
