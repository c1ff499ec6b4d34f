"""``waypoint routes`` — list the routes of a routes file.

Loads the file into a RouteCollection and prints name, methods, and
template for each route, in match priority order.
"""

import argparse
import sys

from waypoint.errors import ConfigurationError
from waypoint.routing.loader import load_routes


def run_routes(args: argparse.Namespace) -> None:
    """Print a NAME / METHOD / PATH table for ``args.file``."""
    try:
        routes = load_routes(args.file)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not len(routes):
        print("No routes registered.")
        return

    # Build rows: (name, methods_str, path)
    rows: list[tuple[str, str, str]] = []
    for name, route in routes.items():
        methods_str = ", ".join(sorted(route.methods)) or "ANY"
        rows.append((name, methods_str, route.path))

    # Column widths
    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_methods = max(max(len(r[1]) for r in rows), 6)  # "METHOD" header

    fmt = f"{{:<{max_name}}}  {{:<{max_methods}}}  {{}}"
    print(fmt.format("NAME", "METHOD", "PATH"))
    sep_len = max_name + max_methods + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for name, methods_str, path in rows:
        print(fmt.format(name, methods_str, path))
