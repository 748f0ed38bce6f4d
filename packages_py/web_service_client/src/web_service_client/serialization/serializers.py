"""
Serializers for the typed serialization layer.
"""
import json
from typing import Any, Generic, Type, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


class JsonSerializer:
    """Plain JSON serializer for dicts, lists and scalars."""

    def serialize(self, obj: Any) -> bytes:
        return json.dumps(obj, ensure_ascii=False).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data)


class PydanticSerializer(Generic[T]):
    """Serializer for any type pydantic can validate.

    Covers ``BaseModel`` subclasses, dataclasses, TypedDicts and containers
    of those (``List[Model]``, ``Dict[str, Model]``). Field aliases are used
    on the wire and ``None`` fields are left out of request bodies.
    """

    def __init__(self, tp: Type[T]):
        self._type = tp
        self._adapter: TypeAdapter[T] = TypeAdapter(tp)

    @property
    def type(self) -> Type[T]:
        return self._type

    def serialize(self, obj: T) -> bytes:
        return self._adapter.dump_json(obj, by_alias=True, exclude_none=True)

    def deserialize(self, data: bytes) -> T:
        return self._adapter.validate_json(data)
