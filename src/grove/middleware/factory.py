"""Middleware factory — resolves middleware definitions into callables.

A definition is whatever was passed to ``add_middleware()``:

- a callable with the middleware shape, used as-is;
- a middleware class, instantiated through a registered provider or with
  no arguments;
- a string identifier, looked up among registered providers.

Usage::

    factory = MiddlewareFactory()
    factory.provide("auth", lambda: RequireToken(realm="api"))

    group.add_middleware("auth")
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from grove.errors import ConfigurationError
from grove.middleware.protocol import MiddlewareDefinition

logger = logging.getLogger("grove.middleware")


class MiddlewareFactory:
    """Turns middleware definitions into middleware callables.

    Providers are zero-argument factories keyed by string identifier or by
    class. A class definition without a provider is instantiated directly.
    """

    __slots__ = ("_providers",)

    def __init__(
        self,
        providers: Mapping[str | type, Callable[[], Any]] | None = None,
    ) -> None:
        self._providers: dict[str | type, Callable[[], Any]] = dict(providers or {})

    def provide(self, key: str | type, factory: Callable[[], Any]) -> None:
        """Register a zero-argument factory for an identifier or class."""
        self._providers[key] = factory

    def has(self, key: str | type) -> bool:
        return key in self._providers

    def create(self, definition: MiddlewareDefinition) -> Callable[..., Any]:
        """Resolve a definition into a middleware callable.

        Raises ``ConfigurationError`` for unknown identifiers and for
        definitions that don't resolve to something callable.
        """
        if isinstance(definition, str):
            if definition not in self._providers:
                msg = (
                    f"Unknown middleware {definition!r}. "
                    f"Register it with MiddlewareFactory.provide({definition!r}, ...)."
                )
                raise ConfigurationError(msg)
            middleware = self._providers[definition]()
        elif inspect.isclass(definition):
            provider = self._providers.get(definition, definition)
            middleware = provider()
        else:
            middleware = definition

        if not callable(middleware):
            msg = (
                f"Middleware definition {definition!r} resolved to "
                f"{type(middleware).__name__}, which is not callable."
            )
            raise ConfigurationError(msg)

        logger.debug("Resolved middleware %r -> %r", definition, middleware)
        return middleware
