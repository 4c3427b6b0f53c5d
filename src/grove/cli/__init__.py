"""Grove CLI — route listing and middleware-chain debugging.

Entry point registered as ``grove`` in ``pyproject.toml``::

    [project.scripts]
    grove = "grove.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``grove`` command."""
    parser = argparse.ArgumentParser(
        prog="grove",
        description="grove — nested route groups compiled into one named route collection.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- grove routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes")
    routes_parser.add_argument(
        "target",
        help="Import string (e.g. myapp.urls:routes)",
    )
    routes_parser.add_argument(
        "--tree",
        action="store_true",
        help="Show the group nesting instead of a flat table",
    )

    # -- grove call -------------------------------------------------------
    call_parser = subparsers.add_parser(
        "call", help="Run a request through a route's middleware chain"
    )
    call_parser.add_argument(
        "target",
        help="Import string (e.g. myapp.urls:routes)",
    )
    call_parser.add_argument("name", help="Route name")
    call_parser.add_argument("--method", default=None, help="HTTP method (default: route's first)")
    call_parser.add_argument("--path", default=None, help="Request path (default: route pattern)")
    call_parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        help="Request header as 'Name: value' (repeatable)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from grove.cli._routes import run_routes

        run_routes(args)
    elif args.command == "call":
        from grove.cli._call import run_call

        run_call(args)
