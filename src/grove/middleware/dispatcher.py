"""Middleware dispatcher — runs a middleware chain around a terminal handler.

The dispatcher is the shared dispatch handle groups inject into their
routes. It is immutable: ``with_middlewares()`` returns a new dispatcher
sharing the same factory, so one handle can serve every route.

Stack order is last-in, first-out. The last definition in the chain is
the outermost middleware and runs first. Flattening appends enclosing
group middleware after a route's own, so at dispatch time the outermost
group's middleware runs first and the route's own middleware runs last,
right before the terminal handler::

    chain = (route_mw, inner_group_mw, outer_group_mw)
    # outer_group_mw -> inner_group_mw -> route_mw -> handler
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

from grove._internal.invoke import invoke
from grove.http.request import Request
from grove.http.response import Response
from grove.middleware.factory import MiddlewareFactory
from grove.middleware.protocol import Handler, MiddlewareDefinition, Next

logger = logging.getLogger("grove.middleware")


class MiddlewareDispatcher:
    """Resolves middleware definitions and dispatches requests through them.

    Usage::

        dispatcher = MiddlewareDispatcher(factory)
        chained = dispatcher.with_middlewares([timing, "auth"])
        response = await chained.dispatch(request, handler)

    Definitions are resolved on the first ``dispatch()`` and cached for
    the lifetime of the dispatcher instance.
    """

    __slots__ = ("_factory", "_lock", "_middleware", "_resolved")

    def __init__(
        self,
        factory: MiddlewareFactory | None = None,
        middleware: Iterable[MiddlewareDefinition] = (),
    ) -> None:
        self._factory = factory or MiddlewareFactory()
        self._middleware: tuple[MiddlewareDefinition, ...] = tuple(middleware)
        self._resolved: tuple[Callable[..., Any], ...] | None = None
        self._lock = threading.Lock()

    @property
    def factory(self) -> MiddlewareFactory:
        return self._factory

    @property
    def middleware(self) -> tuple[MiddlewareDefinition, ...]:
        """The middleware definitions, in chain order."""
        return self._middleware

    def has_middlewares(self) -> bool:
        return bool(self._middleware)

    def with_middlewares(self, definitions: Iterable[MiddlewareDefinition]) -> MiddlewareDispatcher:
        """Return a new dispatcher running *definitions* (replacing any current chain)."""
        return MiddlewareDispatcher(self._factory, definitions)

    def _resolve(self) -> tuple[Callable[..., Any], ...]:
        if self._resolved is None:
            with self._lock:
                if self._resolved is None:
                    self._resolved = tuple(self._factory.create(d) for d in self._middleware)
        return self._resolved

    async def dispatch(self, request: Request, handler: Handler) -> Response:
        """Run *request* through the chain, ending at *handler*.

        A middleware that returns without awaiting ``next`` short-circuits
        every middleware after it and the terminal handler.
        """
        resolved = self._resolve()
        logger.debug(
            "Dispatching %s %s through %d middleware",
            request.method,
            request.path,
            len(resolved),
        )

        async def terminal(req: Request) -> Response:
            return await invoke(handler, req)

        # Wrap in chain order so the last definition ends up outermost
        chain: Next = terminal
        for mw in resolved:
            inner = chain

            async def make_next(req: Request, _mw: Any = mw, _next: Next = inner) -> Response:
                return await invoke(_mw, req, _next)

            chain = make_next

        return await chain(request)

    def __repr__(self) -> str:
        return f"MiddlewareDispatcher(middleware={len(self._middleware)})"
