"""Immutable HTTP request.

Grove never parses HTTP itself; this is the value that flows through a
route's middleware chain. Middleware annotate it by deriving a new request
with ``.with_attribute()`` and passing that one to ``next``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from grove.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``attributes`` is an ordered, read-only mapping of values stamped by
    middleware (authenticated user, locale, timings).
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    # -- Attributes --

    def get_attribute(self, name: str, default: Any = None) -> Any:
        """Return the attribute *name*, or *default* if no middleware set it."""
        return self.attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> Request:
        """Return a new Request with *name* set to *value*."""
        attributes = {**self.attributes, name: value}
        return replace(self, attributes=MappingProxyType(attributes))

    def without_attribute(self, name: str) -> Request:
        """Return a new Request with *name* removed."""
        attributes = {k: v for k, v in self.attributes.items() if k != name}
        return replace(self, attributes=MappingProxyType(attributes))

    # -- Headers --

    def with_header(self, name: str, value: str) -> Request:
        """Return a new Request with an additional header."""
        return replace(self, headers=self.headers.with_header(name, value))
