"""Tests for grove.errors — exception hierarchy and error messages."""

from grove.errors import (
    ConfigurationError,
    DuplicateRouteName,
    GroveError,
    RouteNameAlreadySet,
    RouteNotFound,
)
from grove.routing.route import Route


class TestHierarchy:
    def test_configuration_error_is_grove_error(self) -> None:
        assert issubclass(ConfigurationError, GroveError)

    def test_duplicate_name_is_configuration_error(self) -> None:
        assert issubclass(DuplicateRouteName, ConfigurationError)

    def test_name_already_set_is_configuration_error(self) -> None:
        assert issubclass(RouteNameAlreadySet, ConfigurationError)

    def test_route_not_found_is_lookup_error(self) -> None:
        assert issubclass(RouteNotFound, GroveError)
        assert issubclass(RouteNotFound, LookupError)


class TestMessages:
    def test_duplicate_route_name(self) -> None:
        first = Route.get("/").with_name("home")
        second = Route.get("/api/home").with_name("home")
        err = DuplicateRouteName("home", first, second)
        assert err.first is first
        assert err.second is second
        assert str(err) == (
            "A route with name 'home' already exists: GET / conflicts with GET /api/home."
        )

    def test_route_name_already_set(self) -> None:
        err = RouteNameAlreadySet("home", "index")
        assert str(err) == "Route is already named 'home'; refusing to rename it to 'index'."

    def test_route_not_found(self) -> None:
        err = RouteNotFound("missing")
        assert err.name == "missing"
        assert str(err) == "There is no route named 'missing'."
