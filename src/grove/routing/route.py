"""Route — a frozen route definition.

Every transformation returns a new Route; the original is never changed.
Flattening relies on this: prefixes and group middleware are folded into
copies while the caller's routes stay exactly as they were built.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from grove.errors import ConfigurationError, RouteNameAlreadySet
from grove.middleware.dispatcher import MiddlewareDispatcher
from grove.middleware.protocol import MiddlewareDefinition

HTTP_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Built with the named constructors and chained ``.with_*()`` calls::

        Route.get("/users/{id}").with_name("user-view").with_middleware(auth)
    """

    pattern: str
    methods: frozenset[str]
    name: str | None = None
    middleware: tuple[MiddlewareDefinition, ...] = ()
    dispatcher: MiddlewareDispatcher | None = None

    # Lazily built dispatcher-with-middleware; fresh for every copy
    _cache: dict[str, Any] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        methods = frozenset(m.upper() for m in self.methods)
        if not methods:
            msg = f"Route {self.pattern!r} must accept at least one HTTP method."
            raise ConfigurationError(msg)
        object.__setattr__(self, "methods", methods)
        object.__setattr__(self, "middleware", tuple(self.middleware))

    # -- Named constructors --

    @classmethod
    def methods_of(cls, methods: Iterable[str], pattern: str) -> Route:
        """A route answering every verb in *methods*."""
        return cls(pattern=pattern, methods=frozenset(methods))

    @classmethod
    def get(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"GET"}))

    @classmethod
    def post(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"POST"}))

    @classmethod
    def put(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"PUT"}))

    @classmethod
    def delete(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"DELETE"}))

    @classmethod
    def patch(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"PATCH"}))

    @classmethod
    def head(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"HEAD"}))

    @classmethod
    def options(cls, pattern: str) -> Route:
        return cls(pattern=pattern, methods=frozenset({"OPTIONS"}))

    @classmethod
    def any(cls, pattern: str) -> Route:
        """A route answering every standard HTTP verb."""
        return cls(pattern=pattern, methods=frozenset(HTTP_METHODS))

    # -- Chainable transformations --

    def with_name(self, name: str) -> Route:
        """Return a new Route with *name* set.

        Raises ``RouteNameAlreadySet`` if this route is already named.
        """
        if not name:
            msg = f"Route {self} cannot be given an empty name."
            raise ConfigurationError(msg)
        if self.name is not None:
            raise RouteNameAlreadySet(self.name, name)
        return replace(self, name=name)

    def with_pattern(self, pattern: str) -> Route:
        """Return a new Route with the pattern replaced."""
        return replace(self, pattern=pattern)

    def with_middleware(self, definition: MiddlewareDefinition) -> Route:
        """Return a new Route with *definition* appended to its chain."""
        return replace(self, middleware=(*self.middleware, definition))

    def with_dispatcher(self, dispatcher: MiddlewareDispatcher) -> Route:
        """Return a new Route using *dispatcher* as its dispatch handle."""
        return replace(self, dispatcher=dispatcher)

    # -- Accessors --

    def get_name(self) -> str:
        """The explicit name, or ``"METHODS PATTERN"`` for unnamed routes."""
        if self.name is not None:
            return self.name
        return str(self)

    def has_dispatcher(self) -> bool:
        return self.dispatcher is not None

    def get_dispatcher_with_middlewares(self) -> MiddlewareDispatcher:
        """The dispatch handle combined with this route's middleware chain.

        Built on first call and cached. Concurrent first calls may each build
        one, but ``setdefault`` keeps the first stored, so every caller gets
        the same instance. The terminal handler is passed to ``dispatch()``
        by the caller.
        """
        if self.dispatcher is None:
            msg = f"Route {self.get_name()!r} has no dispatcher. Pass one to Group.create()."
            raise ConfigurationError(msg)
        cached = self._cache.get("dispatcher")
        if cached is None:
            cached = self._cache.setdefault(
                "dispatcher", self.dispatcher.with_middlewares(self.middleware)
            )
        return cached

    def __str__(self) -> str:
        return f"{','.join(sorted(self.methods))} {self.pattern}"
