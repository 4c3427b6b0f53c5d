"""Routing — route groups compiled into a flat, named route collection.

Groups are assembled during setup and compiled into an immutable
name -> route index (plus a nesting-preserving tree) when a
``RouteCollection`` is created.
"""

from grove.routing.collection import RouteCollection
from grove.routing.group import Group, RouteItem
from grove.routing.route import HTTP_METHODS, Route
from grove.routing.tree import Branch, Leaf, TreeNode

__all__ = [
    "HTTP_METHODS",
    "Branch",
    "Group",
    "Leaf",
    "Route",
    "RouteCollection",
    "RouteItem",
    "TreeNode",
]
