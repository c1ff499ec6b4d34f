"""``waypoint match`` and ``waypoint generate`` — exercise a routes file."""

import argparse
import json
import sys

from waypoint.config import RouterConfig
from waypoint.errors import ConfigurationError, GenerationError, HTTPError
from waypoint.routing.router import Router


def _load_router(file: str, config: RouterConfig | None = None) -> Router:
    try:
        return Router.from_file(file, config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_match(args: argparse.Namespace) -> None:
    """Print the parameters ``args.path`` resolves to, as JSON."""
    router = _load_router(args.file)
    try:
        params = router.match(args.path, args.method)
    except HTTPError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(json.dumps(params, indent=2, default=str))


def run_generate(args: argparse.Namespace) -> None:
    """Print the path (or absolute URL) for route ``args.name``."""
    params: dict[str, str] = {}
    for item in args.param:
        key, sep, value = item.partition("=")
        if not sep or not key:
            print(f"Error: --param expects KEY=VALUE, got {item!r}", file=sys.stderr)
            raise SystemExit(2)
        params[key] = value

    config = RouterConfig(base_url=args.base_url) if args.base_url else None
    router = _load_router(args.file, config)
    try:
        url = router.generate(args.name, params, absolute=config is not None)
    except (HTTPError, GenerationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(url)
