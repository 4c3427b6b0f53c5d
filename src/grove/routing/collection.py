"""RouteCollection — compiles a group tree into named, fully resolved routes.

The whole tree is walked once, eagerly, in the constructor. Afterwards the
collection is read-only: a name -> Route index plus a tree mirroring the
original group nesting. Both come out of the same pass, so every name in
the tree is in the index and vice versa.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from grove.config import RoutingConfig
from grove.errors import ConfigurationError, DuplicateRouteName, RouteNotFound
from grove.middleware.protocol import MiddlewareDefinition
from grove.routing.group import Group
from grove.routing.route import Route
from grove.routing.tree import Branch, Leaf, TreeNode, format_tree, render_tree

logger = logging.getLogger("grove.routing")


class _Flattener:
    """Single-pass visitor. Owns the route index; returns tree nodes per level.

    Each group's items see the group's own middleware followed by the
    middleware inherited from enclosing groups, innermost first. A route
    nested in ``/api`` [M1] -> ``/v1`` [M2] with its own [R] ends up with
    the chain ``(R, M2, M1)``.
    """

    __slots__ = ("_config", "_seen", "routes", "visited")

    def __init__(self, config: RoutingConfig) -> None:
        self._config = config
        self._seen: set[int] = set()
        self.routes: dict[str, Route] = {}
        self.visited: list[Group] = []

    def flatten(
        self,
        group: Group,
        prefix: str,
        inherited: tuple[MiddlewareDefinition, ...],
    ) -> tuple[TreeNode, ...]:
        if group.is_frozen or id(group) in self._seen:
            msg = (
                f"Group {group.get_prefix()!r} appears twice in the tree or is already part of a "
                "compiled RouteCollection. "
                "A group instance can be compiled only once; build a new group instead."
            )
            raise ConfigurationError(msg)
        self._seen.add(id(group))
        self.visited.append(group)

        chain = (*group.get_middleware_definitions(), *inherited)
        nodes: list[TreeNode] = []
        for item in group.get_items():
            match item:
                case Route():
                    nodes.append(Leaf(self._add_route(item, prefix, chain)))
                case Group() if not item.get_prefix():
                    # Transparent: same level, same prefix
                    nodes.extend(self.flatten(item, prefix, chain))
                case Group():
                    nested_prefix = self._config.join(prefix, item.get_prefix())
                    children = self.flatten(item, nested_prefix, chain)
                    nodes.append(Branch(item.get_prefix(), children))
        return tuple(nodes)

    def _add_route(
        self,
        route: Route,
        prefix: str,
        chain: tuple[MiddlewareDefinition, ...],
    ) -> str:
        for definition in chain:
            route = route.with_middleware(definition)
        route = route.with_pattern(self._config.join(prefix, route.pattern))

        name = route.get_name()
        existing = self.routes.get(name)
        if existing is not None:
            raise DuplicateRouteName(name, existing, route)
        self.routes[name] = route

        if self._config.log_routes:
            logger.debug(
                "Route %r -> %s (%d middleware)", name, route, len(route.middleware)
            )
        return name


class RouteCollection:
    """A flat, uniquely named view of a group tree.

    Usage::

        root = Group.create(None, [
            Group.create("/api", [
                Route.post("/logout").with_name("logout"),
            ]).add_middleware(auth),
        ])
        routes = RouteCollection(root)
        routes.get_route("logout").pattern   # "/api/logout"
        routes.get_route_tree()              # [{"/api": ["POST /api/logout"]}]

    The root group must not carry middleware: there is no enclosing group
    for it to apply through. Construction either fully succeeds or raises;
    a partially compiled collection is never exposed.
    """

    __slots__ = ("_config", "_routes", "_tree")

    def __init__(self, root: Group, config: RoutingConfig | None = None) -> None:
        if root.get_middleware_definitions():
            msg = (
                "The root group can't have middleware. "
                "Attach it to a prefixed or transparent subgroup instead."
            )
            raise ConfigurationError(msg)

        self._config = config or RoutingConfig()
        flattener = _Flattener(self._config)
        children = flattener.flatten(root, root.get_prefix(), ())
        for group in flattener.visited:
            group.freeze()
        self._routes: dict[str, Route] = flattener.routes
        self._tree = Branch(None, children)
        logger.debug("Compiled %d routes", len(self._routes))

    # -- Queries --

    def get_routes(self) -> Mapping[str, Route]:
        """All routes by name, in compilation order. Read-only."""
        return MappingProxyType(self._routes)

    def get_route(self, name: str) -> Route:
        """The route registered as *name*. Raises ``RouteNotFound``."""
        try:
            return self._routes[name]
        except KeyError:
            raise RouteNotFound(name) from None

    def get_route_tree(self, as_string: bool = True) -> list[Any]:
        """The original nesting with each route rendered in place.

        Always a list, the root level included: a prefixed group at any
        level is a single-key dict ``{prefix: [...]}`` at its position, so
        two sibling groups sharing a prefix stay two entries::

            [{"/api": ["POST /api/logout", {"/post": ["GET /api/post/{id}"]}]}]

        Leaves are ``"METHOD PATTERN"`` strings when *as_string* is true,
        otherwise the ``Route`` objects themselves.
        """
        if as_string:
            return render_tree(self._tree, lambda name: str(self.get_route(name)))
        return render_tree(self._tree, self.get_route)

    def format(self) -> str:
        """The tree as indented text, for terminals and logs."""
        return format_tree(
            self._tree,
            lambda name: f"{self._routes[name]}  ({name})",
            indent=self._config.tree_indent,
        )

    @property
    def tree(self) -> Branch:
        """The typed route tree; leaves hold route names."""
        return self._tree

    @property
    def config(self) -> RoutingConfig:
        return self._config

    # -- Container protocol --

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __repr__(self) -> str:
        return f"RouteCollection(routes={len(self._routes)})"
