"""Waypoint CLI — inspect route files, match paths, and generate URLs.

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
        description="waypoint — inspect and exercise declarative route files.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in registration order")
    routes_parser.add_argument("file", help="Routes file (.py, .json, .toml, .yaml)")

    # -- waypoint match ---------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a path against a routes file")
    match_parser.add_argument("file", help="Routes file (.py, .json, .toml, .yaml)")
    match_parser.add_argument("path", help="Request path, e.g. /article/42")
    match_parser.add_argument("--method", default="GET", help="HTTP method (default: GET)")

    # -- waypoint generate ------------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Generate a URL for a route name")
    generate_parser.add_argument("file", help="Routes file (.py, .json, .toml, .yaml)")
    generate_parser.add_argument("name", help="Route name")
    generate_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Route or query parameter (repeatable)",
    )
    generate_parser.add_argument(
        "--base-url",
        default=None,
        help="Generate an absolute URL under this scheme and host",
    )

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
    elif args.command == "generate":
        from waypoint.cli._match import run_generate

        run_generate(args)
