"""Process context contract and an in-memory implementation.

The process context carries the state of the inbound request that
triggered a load. Loaders only ever write into it through
``set_parameter``; everything else is up to the controller layer.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ProcessContext(Protocol):
    def set_parameter(self, key: str, value: Any) -> None:
        """Store a value under ``key``, replacing any previous value."""
        ...


class ProcessEvent:
    """Dictionary-backed process context.

    Holds the inbound request attributes and a parameter store that
    loaders write their results into. Suitable for tests, examples and
    controller layers that have no richer request object.

    Attributes:
        request: Read-only mapping of inbound request attributes
            (route parameters, query string values, etc.).

    Examples:
        >>> event = ProcessEvent(request={"id": 3})
        >>> loader.load_item(event, "get_item", bus)
        >>> event.get_parameter("query_storage")
    """

    def __init__(self, request: Mapping[str, Any] | None = None):
        self.request: Mapping[str, Any] = dict(request or {})
        self._parameters: dict[str, Any] = {}

    def set_parameter(self, key: str, value: Any) -> None:
        self._parameters[key] = value

    def get_parameter(self, key: str, default: Any = None) -> Any:
        return self._parameters.get(key, default)

    def has_parameter(self, key: str) -> bool:
        return key in self._parameters

    @property
    def parameters(self) -> dict[str, Any]:
        """A copy of all stored parameters."""
        return dict(self._parameters)
