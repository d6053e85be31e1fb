"""Semi-structured fallback content consulted by records."""

import json
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from .result import Result


@runtime_checkable
class SemiStructured(Protocol):
    """Capability of a secondary key/value source behind a record."""

    def get(self, key: str) -> Result:
        ...

    def invoke(self, method: str, *args, **kwargs) -> Result:
        ...


class JSONContent:
    """Read-only view over decoded JSON content.

    Nested mappings are returned wrapped in JSONContent, so lookups can be
    chained: ``content.get("author").value.get("name")``.
    """

    _MAPPING_METHODS = ("keys", "values", "items")

    def __init__(self, data: Mapping | str | bytes):
        """Initialize JSONContent.

        Args:
            data: Mapping, or a JSON document that decodes to one

        Raises:
            ValueError: If the data is not a JSON object
        """
        if isinstance(data, (str, bytes)):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise ValueError(
                f"JSON content must be an object, got {type(data).__name__}"
            )
        self._data = data

    @property
    def data(self) -> Mapping:
        """The wrapped mapping."""
        return self._data

    def get(self, key: str) -> Result:
        """Look up a top-level key."""
        if key not in self._data:
            return Result.absent(key, f"JSON content has no key {key!r}")
        value = self._data[key]
        if isinstance(value, Mapping):
            value = JSONContent(value)
        return Result.ok(value, key)

    def invoke(self, method: str, *args, **kwargs) -> Result:
        """Call a callable stored under ``method``, or a mapping view method."""
        target = self._data.get(method)
        if callable(target):
            return Result.ok(target(*args, **kwargs), method)
        if method in self._MAPPING_METHODS:
            return Result.ok(list(getattr(self._data, method)(*args, **kwargs)), method)
        return Result.absent(method, f"JSON content has no method {method!r}")

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JSONContent):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"JSONContent({dict(self._data)!r})"
