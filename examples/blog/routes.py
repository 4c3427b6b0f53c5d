"""Blog routes — nested groups, shared middleware, and a compiled collection.

Demonstrates:
- Prefixed groups composing patterns (/api/post/{id})
- A transparent group sharing middleware without adding a path segment
- Identifier middleware resolved through a MiddlewareFactory

Run:
    cd examples/blog
    PYTHONPATH=. grove routes routes --tree
    PYTHONPATH=. grove call routes post-create -H "Authorization: Bearer demo"
"""

import time

from grove import (
    Group,
    MiddlewareDispatcher,
    MiddlewareFactory,
    Request,
    Response,
    Route,
    RouteCollection,
)
from grove.middleware.protocol import Next


async def timing(request: Request, next: Next) -> Response:
    """Add X-Response-Time to every response."""
    start = time.monotonic()
    response = await next(request)
    return response.with_header("X-Response-Time", f"{time.monotonic() - start:.3f}s")


class RequireToken:
    """Reject requests without an Authorization header."""

    async def __call__(self, request: Request, next: Next) -> Response:
        token = request.headers.get("authorization")
        if token is None:
            return Response("Unauthorized", status=401)
        return await next(request.with_attribute("token", token))


factory = MiddlewareFactory()
factory.provide("auth", RequireToken)


def build() -> Group:
    return Group.create(
        None,
        [
            Route.get("/").with_name("home"),
            Group.create(
                "/api",
                [
                    Route.post("/logout").with_name("logout"),
                    Group.create(
                        "/post",
                        [
                            Route.get("/").with_name("post-list"),
                            Route.get("/{id}").with_name("post-view"),
                            Group.create(
                                None,
                                [
                                    Route.post("/").with_name("post-create"),
                                    Route.delete("/{id}").with_name("post-delete"),
                                ],
                            ).add_middleware("auth"),
                        ],
                    ),
                ],
            ).add_middleware(timing),
        ],
        MiddlewareDispatcher(factory),
    )


routes = RouteCollection(build())
