"""Group — a composite node of routes, subgroups, and shared middleware.

Mutable during setup (routes, subgroups, middleware). Frozen when a
``RouteCollection`` compiles it; after that every ``add_*`` call raises.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from grove.errors import ConfigurationError
from grove.middleware.dispatcher import MiddlewareDispatcher
from grove.middleware.protocol import MiddlewareDefinition
from grove.routing.route import Route

# A child of a group
type RouteItem = Route | Group


class Group:
    """A prefix, ordered child items, and middleware applied to all of them.

    Two equivalent ways to build one::

        api = Group.create("/api", [
            Route.get("/users").with_name("users"),
            Group.create("/admin", [Route.get("/stats").with_name("stats")]),
        ]).add_middleware(auth)

        def build(group: Group) -> None:
            group.add_route(Route.get("/users").with_name("users"))
            group.add_middleware(auth)

        api = Group.create("/api", build)

    An empty prefix makes the group *transparent*: it adds no path segment
    and no tree level, but its middleware still applies to its children.

    When the group has a dispatcher, every route and subgroup added to it
    that lacks one receives it.
    """

    __slots__ = ("_dispatcher", "_frozen", "_items", "_middleware", "_prefix")

    def __init__(self, prefix: str = "", dispatcher: MiddlewareDispatcher | None = None) -> None:
        self._prefix = prefix
        self._dispatcher = dispatcher
        self._items: list[RouteItem] = []
        self._middleware: list[MiddlewareDefinition] = []
        self._frozen = False

    @classmethod
    def create(
        cls,
        prefix: str | None = None,
        items: Iterable[RouteItem] | Callable[[Group], object] | None = None,
        dispatcher: MiddlewareDispatcher | None = None,
    ) -> Group:
        """Create a group from a list of items or a builder callback."""
        group = cls(prefix or "", dispatcher)
        if callable(items):
            items(group)
        elif items is not None:
            for item in items:
                match item:
                    case Route():
                        group.add_route(item)
                    case Group():
                        group.add_group(item)
                    case _:
                        msg = f"Group items must be Route or Group, got {type(item).__name__}."
                        raise ConfigurationError(msg)
        return group

    # -- Builder --

    def add_route(self, route: Route) -> Group:
        """Append a route. Returns the group for chaining."""
        self._check_not_frozen()
        if self._dispatcher is not None and not route.has_dispatcher():
            route = route.with_dispatcher(self._dispatcher)
        self._items.append(route)
        return self

    def add_group(self, group: Group) -> Group:
        """Append a subgroup. Returns the group for chaining."""
        self._check_not_frozen()
        if group.is_frozen:
            msg = (
                f"Group {group.get_prefix()!r} has already been compiled into a "
                "RouteCollection and cannot be attached to another group."
            )
            raise ConfigurationError(msg)
        if self._dispatcher is not None and not group.has_dispatcher():
            group._inject_dispatcher(self._dispatcher)
        self._items.append(group)
        return self

    def add_middleware(self, definition: MiddlewareDefinition) -> Group:
        """Append a middleware definition applied to every child item."""
        self._check_not_frozen()
        self._middleware.append(definition)
        return self

    # -- Accessors --

    def get_items(self) -> tuple[RouteItem, ...]:
        return tuple(self._items)

    def get_middleware_definitions(self) -> tuple[MiddlewareDefinition, ...]:
        return tuple(self._middleware)

    def get_prefix(self) -> str:
        return self._prefix

    def has_dispatcher(self) -> bool:
        return self._dispatcher is not None

    @property
    def dispatcher(self) -> MiddlewareDispatcher | None:
        return self._dispatcher

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Group:
        """Mark this group immutable. Nested groups are frozen as they are compiled."""
        self._frozen = True
        return self

    # -- Internal --

    def _inject_dispatcher(self, dispatcher: MiddlewareDispatcher) -> None:
        """Set *dispatcher* here and on every descendant that lacks one."""
        self._dispatcher = dispatcher
        for index, item in enumerate(self._items):
            match item:
                case Route() if not item.has_dispatcher():
                    self._items[index] = item.with_dispatcher(dispatcher)
                case Group() if not item.has_dispatcher():
                    item._inject_dispatcher(dispatcher)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                f"Cannot modify group {self._prefix!r} after it has been compiled. "
                "Add routes, subgroups, and middleware before creating the RouteCollection."
            )
            raise ConfigurationError(msg)

    def __repr__(self) -> str:
        return (
            f"Group(prefix={self._prefix!r}, items={len(self._items)}, "
            f"middleware={len(self._middleware)})"
        )
