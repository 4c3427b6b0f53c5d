"""Grove exception hierarchy.

Shared across Route, Group, RouteCollection, and the middleware layer so
every module raises and catches the same types.
"""

from typing import Any


class GroveError(Exception):
    """Base for all grove-specific errors."""


class ConfigurationError(GroveError):
    """Raised when a route definition tree is invalid.

    Typically raised while a ``RouteCollection`` is being compiled:
    middleware on the root group, a group compiled twice, a route
    dispatched without a dispatcher.
    """


class DuplicateRouteName(ConfigurationError):  # noqa: N818
    """Two routes anywhere in the tree share a name.

    Carries both routes so the message can show where the clash is.
    """

    def __init__(self, name: str, first: Any, second: Any) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"A route with name {name!r} already exists: "
            f"{first} conflicts with {second}."
        )


class RouteNameAlreadySet(ConfigurationError):  # noqa: N818
    """``Route.with_name()`` called on a route that already has a name."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Route is already named {current!r}; refusing to rename it to {requested!r}."
        )


class RouteNotFound(GroveError, LookupError):  # noqa: N818
    """No route is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"There is no route named {name!r}.")
