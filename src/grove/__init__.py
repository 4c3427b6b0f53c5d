"""Grove — nested route groups compiled into one flat, named route collection.

Build a tree of groups (prefixes, middleware, routes), compile it once,
then look routes up by name or inspect the original nesting.

Basic usage::

    from grove import Group, Route, RouteCollection

    root = Group.create(None, [
        Group.create("/api", [
            Route.post("/logout").with_name("logout"),
            Group.create("/post", [
                Route.get("/").with_name("post-list"),
                Route.get("/{id}").with_name("post-view"),
            ]),
        ]).add_middleware(auth),
    ])

    routes = RouteCollection(root)
    routes.get_route("post-view").pattern   # "/api/post/{id}"

Dispatching through a route's middleware::

    root = Group.create(None, [api], dispatcher=MiddlewareDispatcher())
    ...
    chain = routes.get_route("logout").get_dispatcher_with_middlewares()
    response = await chain.dispatch(request, handler)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DuplicateRouteName",
    "Group",
    "GroveError",
    "Middleware",
    "MiddlewareDispatcher",
    "MiddlewareFactory",
    "Next",
    "Request",
    "Response",
    "Route",
    "RouteCollection",
    "RouteNameAlreadySet",
    "RouteNotFound",
    "RoutingConfig",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "grove.errors",
    "DuplicateRouteName": "grove.errors",
    "GroveError": "grove.errors",
    "RouteNameAlreadySet": "grove.errors",
    "RouteNotFound": "grove.errors",
    "Group": "grove.routing.group",
    "Route": "grove.routing.route",
    "RouteCollection": "grove.routing.collection",
    "RoutingConfig": "grove.config",
    "Middleware": "grove.middleware.protocol",
    "Next": "grove.middleware.protocol",
    "MiddlewareDispatcher": "grove.middleware.dispatcher",
    "MiddlewareFactory": "grove.middleware.factory",
    "Request": "grove.http.request",
    "Response": "grove.http.response",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import grove`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_path), name)
