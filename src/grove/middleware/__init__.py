"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Components:
    MiddlewareFactory -- Resolves definitions (callables, classes, identifiers)
    MiddlewareDispatcher -- Runs a resolved chain around a terminal handler
"""

from grove.middleware.dispatcher import MiddlewareDispatcher
from grove.middleware.factory import MiddlewareFactory
from grove.middleware.protocol import Handler, Middleware, MiddlewareDefinition, Next

__all__ = [
    "Handler",
    "Middleware",
    "MiddlewareDefinition",
    "MiddlewareDispatcher",
    "MiddlewareFactory",
    "Next",
]
