"""Routing configuration.

RoutingConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Options for compiling a ``RouteCollection``. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RoutingConfig(collapse_slashes=True, log_routes=True)
    """

    # Join "/api/" + "/users" as "/api/users" instead of "/api//users"
    collapse_slashes: bool = False

    # One DEBUG record per flattened route on the "grove.routing" logger
    log_routes: bool = False

    # Indentation width for text trees (format_tree, ``grove routes --tree``)
    tree_indent: int = 2

    def join(self, prefix: str, pattern: str) -> str:
        """Join an accumulated prefix and a route or group pattern."""
        if self.collapse_slashes and prefix.endswith("/") and pattern.startswith("/"):
            return prefix + pattern[1:]
        return prefix + pattern
