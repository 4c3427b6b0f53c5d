"""Tests for grove.middleware.dispatcher — running route middleware chains."""

import logging

import pytest

from grove.errors import ConfigurationError
from grove.http.request import Request
from grove.http.response import Response
from grove.middleware.dispatcher import MiddlewareDispatcher
from grove.middleware.factory import MiddlewareFactory
from grove.routing.collection import RouteCollection
from grove.routing.group import Group
from grove.routing.route import Route


def stamp(label: str):
    """Middleware appending *label* to the request's ``trail`` attribute."""

    async def middleware(request, next):
        trail = (*request.get_attribute("trail", ()), label)
        return await next(request.with_attribute("trail", trail))

    middleware.__name__ = f"stamp_{label}"
    return middleware


async def echo_trail(request: Request) -> Response:
    return Response(",".join(request.get_attribute("trail", ())))


async def not_found(request: Request) -> Response:
    return Response(status=404)


def _compile(group: Group) -> RouteCollection:
    root = Group.create()
    root.add_group(group)
    return RouteCollection(root)


class TestDispatch:
    @pytest.mark.anyio
    async def test_no_middleware_reaches_handler(self) -> None:
        response = await MiddlewareDispatcher().dispatch(Request(), echo_trail)
        assert response.status == 200
        assert response.body == ""

    @pytest.mark.anyio
    async def test_last_definition_runs_first(self) -> None:
        dispatcher = MiddlewareDispatcher().with_middlewares([stamp("a"), stamp("b")])
        response = await dispatcher.dispatch(Request(), echo_trail)
        assert response.body == "b,a"

    @pytest.mark.anyio
    async def test_sync_middleware_and_handler(self) -> None:
        def tag(request, next):
            return next(request.with_attribute("trail", ("sync",)))

        def handler(request):
            return Response(",".join(request.get_attribute("trail")))

        dispatcher = MiddlewareDispatcher().with_middlewares([tag])
        response = await dispatcher.dispatch(Request(), handler)
        assert response.body == "sync"

    @pytest.mark.anyio
    async def test_response_flows_back_through_chain(self) -> None:
        async def add_header(request, next):
            response = await next(request)
            return response.with_header("X-Seen", "yes")

        dispatcher = MiddlewareDispatcher().with_middlewares([add_header])
        response = await dispatcher.dispatch(Request(), echo_trail)
        assert response.header("x-seen") == "yes"

    @pytest.mark.anyio
    async def test_dispatcher_is_reusable(self) -> None:
        dispatcher = MiddlewareDispatcher().with_middlewares([stamp("a")])
        first = await dispatcher.dispatch(Request(), echo_trail)
        second = await dispatcher.dispatch(Request(), echo_trail)
        assert first.body == second.body == "a"

    def test_with_middlewares_returns_new_dispatcher(self) -> None:
        factory = MiddlewareFactory()
        base = MiddlewareDispatcher(factory)
        chained = base.with_middlewares(["auth"])
        assert chained is not base
        assert chained.factory is factory
        assert base.middleware == ()
        assert chained.middleware == ("auth",)
        assert chained.has_middlewares()
        assert not base.has_middlewares()

    @pytest.mark.anyio
    async def test_unknown_identifier_fails_on_dispatch(self) -> None:
        dispatcher = MiddlewareDispatcher().with_middlewares(["missing"])
        with pytest.raises(ConfigurationError, match="Unknown middleware 'missing'"):
            await dispatcher.dispatch(Request(), echo_trail)

    @pytest.mark.anyio
    async def test_logs_dispatch(self, caplog: pytest.LogCaptureFixture) -> None:
        dispatcher = MiddlewareDispatcher().with_middlewares([stamp("a")])
        with caplog.at_level(logging.DEBUG, logger="grove.middleware"):
            await dispatcher.dispatch(Request("POST", "/x"), echo_trail)
        assert "Dispatching POST /x through 1 middleware" in caplog.messages


class TestGroupMiddleware:
    @pytest.mark.anyio
    async def test_nested_group_middleware(self) -> None:
        async def respond_with_trail(request, next):
            return Response(",".join(request.get_attribute("trail", ())))

        group = Group.create(
            "/outergroup",
            [
                Group.create(
                    "/innergroup",
                    [Route.get("/test1").with_name("request1")],
                ).add_middleware(respond_with_trail),
            ],
            MiddlewareDispatcher(),
        ).add_middleware(stamp("middleware1"))

        route = _compile(group).get_route("request1")
        response = await route.get_dispatcher_with_middlewares().dispatch(
            Request("GET", "/outergroup/innergroup/test1"), not_found
        )
        assert response.status == 200
        assert response.body == "middleware1"

    @pytest.mark.anyio
    async def test_outer_before_inner_before_route(self) -> None:
        group = Group.create(
            "/api",
            [
                Group.create(
                    "/v1",
                    [Route.get("/x").with_name("x").with_middleware(stamp("route"))],
                ).add_middleware(stamp("inner")),
            ],
            MiddlewareDispatcher(),
        ).add_middleware(stamp("outer"))

        route = _compile(group).get_route("x")
        response = await route.get_dispatcher_with_middlewares().dispatch(Request(), echo_trail)
        assert response.body == "outer,inner,route"

    @pytest.mark.anyio
    async def test_group_middleware_full_stack_called(self) -> None:
        async def respond_with_trail(request, next):
            return Response(",".join(request.get_attribute("trail", ())))

        group = Group.create(
            "/group",
            lambda r: r.add_route(Route.get("/test1").with_name("request1")),
            MiddlewareDispatcher(),
        )
        group.add_middleware(respond_with_trail).add_middleware(stamp("middleware1"))

        route = _compile(group).get_route("request1")
        response = await route.get_dispatcher_with_middlewares().dispatch(
            Request("GET", "/group/test1"), not_found
        )
        assert response.status == 200
        assert response.body == "middleware1"

    @pytest.mark.anyio
    async def test_group_middleware_stack_interrupted(self) -> None:
        reached: list[str] = []

        async def forbid(request, next):
            return Response(status=403)

        async def allow(request, next):
            reached.append("allow")
            return Response(status=200)

        async def handler(request):
            reached.append("handler")
            return Response(status=200)

        group = Group.create(
            "/group",
            lambda r: r.add_route(Route.get("/test1").with_name("request1")),
            MiddlewareDispatcher(),
        )
        group.add_middleware(allow).add_middleware(forbid)

        route = _compile(group).get_route("request1")
        response = await route.get_dispatcher_with_middlewares().dispatch(
            Request("GET", "/group/test1"), handler
        )
        assert response.status == 403
        assert reached == []

    @pytest.mark.anyio
    async def test_transparent_group_middleware_runs(self) -> None:
        group = Group.create(
            "/api",
            [Group.create(None, [Route.get("/x").with_name("x")]).add_middleware(stamp("inner"))],
            MiddlewareDispatcher(),
        ).add_middleware(stamp("outer"))

        collection = _compile(group)
        route = collection.get_route("x")
        assert route.pattern == "/api/x"
        response = await route.get_dispatcher_with_middlewares().dispatch(Request(), echo_trail)
        assert response.body == "outer,inner"

    @pytest.mark.anyio
    async def test_identifiers_resolved_through_factory(self) -> None:
        factory = MiddlewareFactory()
        factory.provide("tenant", lambda: stamp("tenant"))

        group = Group.create(
            "/api",
            [Route.get("/x").with_name("x")],
            MiddlewareDispatcher(factory),
        ).add_middleware("tenant")

        route = _compile(group).get_route("x")
        response = await route.get_dispatcher_with_middlewares().dispatch(Request(), echo_trail)
        assert response.body == "tenant"
