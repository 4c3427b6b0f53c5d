"""``grove routes`` — list compiled routes.

Resolves an import string to a RouteCollection and prints every route
with name, method, path, and middleware count, or the original group
nesting with ``--tree``.
"""

import argparse
import sys

from grove.cli._resolve import resolve_collection
from grove.errors import GroveError


def _describe(definition: object) -> str:
    if isinstance(definition, str):
        return definition
    return getattr(definition, "__name__", type(definition).__name__)


def run_routes(args: argparse.Namespace) -> None:
    """List routes for a grove RouteCollection.

    Resolves ``args.target``, then prints a table of NAME, METHOD, PATH
    and MIDDLEWARE, or an indented tree when ``args.tree`` is set.
    """
    try:
        collection = resolve_collection(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError, GroveError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not len(collection):
        print("No routes registered.")
        return

    if args.tree:
        print(collection.format())
        return

    # Build rows: (name, methods_str, pattern, middleware)
    rows: list[tuple[str, str, str, str]] = []
    for name, route in collection.get_routes().items():
        methods_str = ", ".join(sorted(route.methods))
        middleware = ", ".join(_describe(d) for d in reversed(route.middleware))
        rows.append((name, methods_str, route.pattern, middleware))

    # Column widths
    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_methods = max(max(len(r[1]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[2]) for r in rows), 4)  # "PATH" header

    # Print table
    fmt = f"{{:<{max_name}}}  {{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("NAME", "METHOD", "PATH", "MIDDLEWARE"))
    sep_len = max_name + max_methods + max_path + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for name, methods_str, pattern, middleware in rows:
        print(fmt.format(name, methods_str, pattern, middleware).rstrip())
