"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The dispatcher checks the shape, not the lineage.
Plain ``def`` middleware works too; the dispatcher awaits the result only
when it is awaitable.

Routes and groups never hold middleware directly. They hold *definitions*,
which the ``MiddlewareFactory`` resolves into callables at dispatch time.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from grove.http.request import Request
from grove.http.response import Response

# The next handler in the middleware chain
type Next = Callable[[Request], Awaitable[Response]]

# Terminal request handler supplied at dispatch time
type Handler = Callable[[Request], Awaitable[Response] | Response]

# Anything the factory can turn into a middleware: a callable, a middleware
# class, or a string identifier registered with ``MiddlewareFactory.provide``
type MiddlewareDefinition = Callable[..., Any] | type | str


class Middleware(Protocol):
    """Protocol for grove middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def locale(request: Request, next: Next) -> Response:
            return await next(request.with_attribute("locale", "en"))

        # Class middleware
        class RequireToken:
            async def __call__(self, request: Request, next: Next) -> Response:
                if "authorization" not in request.headers:
                    return Response("Forbidden", status=403)
                return await next(request)
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
