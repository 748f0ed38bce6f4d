"""
Type-keyed serializer registry.

The registry is supplied by the caller; the services that use it hold no
per-type logic of their own.
"""
import logging
from typing import Any, Dict, Iterator

from ..exceptions import SerializerNotFoundError
from ..types import TypeSerializer
from .serializers import PydanticSerializer

logger = logging.getLogger("web_service_client.serialization.registry")


class SerializerRegistry:
    """Maps a declared type to the serializer that handles it.

    Lookups are by type identity only; subclasses are not matched against
    their base class registration.

    Example:
        registry = SerializerRegistry()
        registry.register_model(Issue, List[Issue])
        registry.register(dict, JsonSerializer())
    """

    def __init__(self) -> None:
        self._serializers: Dict[Any, TypeSerializer] = {}

    def register(self, tp: Any, serializer: TypeSerializer) -> "SerializerRegistry":
        """Register ``serializer`` for ``tp``, replacing any earlier one."""
        logger.debug(f"SerializerRegistry.register: {tp!r} -> {type(serializer).__name__}")
        self._serializers[tp] = serializer
        return self

    def register_model(self, *types: Any) -> "SerializerRegistry":
        """Register a ``PydanticSerializer`` for each of ``types``."""
        for tp in types:
            self.register(tp, PydanticSerializer(tp))
        return self

    def lookup(self, tp: Any) -> TypeSerializer:
        """Return the serializer for ``tp``."""
        try:
            return self._serializers[tp]
        except KeyError:
            raise SerializerNotFoundError(tp) from None

    def __contains__(self, tp: Any) -> bool:
        return tp in self._serializers

    def __len__(self) -> int:
        return len(self._serializers)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._serializers)
