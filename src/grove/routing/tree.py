"""Route tree — the nesting of a flattened group tree, by route name.

``Leaf`` holds a route name, ``Branch`` a prefixed group (or the root,
whose prefix is ``None``). Transparent groups never produce a branch;
their routes sit on the enclosing level.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Leaf:
    """A route, referenced by its name in the collection."""

    name: str


@dataclass(frozen=True, slots=True)
class Branch:
    """A prefixed group and its children, in insertion order."""

    prefix: str | None
    children: tuple[TreeNode, ...] = ()


type TreeNode = Leaf | Branch


def render_tree(branch: Branch, resolve: Callable[[str], Any]) -> list[Any]:
    """Render *branch* as plain lists and dicts.

    Leaves become ``resolve(name)``; a prefixed subgroup becomes a
    single-key dict ``{prefix: [...]}`` at its position::

        ["home", {"/api": ["logout", {"/post": ["post-list"]}]}]
    """
    rendered: list[Any] = []
    for node in branch.children:
        match node:
            case Leaf(name=name):
                rendered.append(resolve(name))
            case Branch(prefix=prefix):
                rendered.append({prefix: render_tree(node, resolve)})
    return rendered


def iter_leaf_names(branch: Branch) -> Iterator[str]:
    """Yield every leaf name under *branch*, depth-first, in order."""
    for node in branch.children:
        match node:
            case Leaf(name=name):
                yield name
            case Branch():
                yield from iter_leaf_names(node)


def format_tree(
    branch: Branch,
    label: Callable[[str], str] = str,
    *,
    indent: int = 2,
    depth: int = 0,
) -> str:
    """Indented text rendering, one route or prefix per line."""
    pad = " " * (indent * depth)
    lines: list[str] = []
    for node in branch.children:
        match node:
            case Leaf(name=name):
                lines.append(f"{pad}{label(name)}")
            case Branch(prefix=prefix):
                lines.append(f"{pad}{prefix}")
                nested = format_tree(node, label, indent=indent, depth=depth + 1)
                if nested:
                    lines.append(nested)
    return "\n".join(lines)
