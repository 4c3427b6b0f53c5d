"""``grove call`` — run a request through one route's middleware chain.

Useful to see which middleware answers before the real handler would:
the terminal handler here always responds ``404 No handler``, so any
other status came from a middleware short-circuiting the chain.
"""

import argparse
import sys

import anyio

from grove.cli._resolve import resolve_collection
from grove.errors import GroveError
from grove.http.request import Request
from grove.http.response import Response


async def _no_handler(request: Request) -> Response:
    return Response("No handler", status=404)


def run_call(args: argparse.Namespace) -> None:
    """Dispatch a synthetic request through ``args.name``'s middleware.

    Prints the status line, any response headers, and the body.
    """
    try:
        collection = resolve_collection(args.target)
        route = collection.get_route(args.name)
        dispatcher = route.get_dispatcher_with_middlewares()
    except (ModuleNotFoundError, AttributeError, TypeError, GroveError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    method = args.method or sorted(route.methods)[0]
    request = Request(method=method, path=args.path or route.pattern)
    for header in args.header:
        name, _, value = header.partition(":")
        request = request.with_header(name.strip(), value.strip())

    try:
        response = anyio.run(dispatcher.dispatch, request, _no_handler)
    except GroveError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"{response.status} {request.method} {request.path}")
    for name, value in response.headers:
        print(f"{name}: {value}")
    if response.body:
        print()
        print(response.body)
