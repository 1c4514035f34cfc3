"""Waypoint CLI — inspect an app's route and filter tables.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — client-side request routing for single-page applications.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes and filters")
    routes_parser.add_argument(
        "app",
        help="Import string or file (e.g. myapp:app, app.py)",
    )

    # -- waypoint match ---------------------------------------------------
    match_parser = subparsers.add_parser(
        "match", help="Show the filters and route a request would run"
    )
    match_parser.add_argument(
        "app",
        help="Import string or file (e.g. myapp:app, app.py)",
    )
    match_parser.add_argument("method", help="Request method (e.g. get, state)")
    match_parser.add_argument("path", help="Request path, optionally with a query string")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from waypoint.cli._match import run_match

        run_match(args)
