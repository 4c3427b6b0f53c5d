"""Invoke helpers — call sync or async callables uniformly.

Middleware and terminal handlers can be ``def`` or ``async def``. Any
code that calls a user-provided callable must handle both cases. This
module provides a single helper so the sync/async check lives in exactly
one place.

Usage::

    from grove._internal.invoke import invoke

    response = await invoke(middleware, request, next)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — returns immediately, no await needed
        def not_found(request):
            return Response("Not Found", status=404)

        # async — returns coroutine, awaited automatically
        async def stamp(request, next):
            return await next(request.with_attribute("seen", True))
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
