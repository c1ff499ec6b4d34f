"""Route file loader — read declarative route configuration from disk.

The format is chosen by suffix:

    routes.py    -> module-level ``routes`` mapping
    routes.json  -> JSON object
    routes.toml  -> TOML tables
    routes.yaml  -> YAML mapping (``.yml`` too)

Every format yields the same shape::

    {"<route_name>": {"path": "...", "defaults": {...},
                      "requirements": {...}, "methods": [...]}}
"""

import importlib.util
import json
import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from waypoint.errors import RouteConfigError, RouteFileNotFound
from waypoint.routing.collection import RouteCollection

logger = logging.getLogger("waypoint.loader")

# Name of the mapping a Python routes file must define
ROUTES_ATTRIBUTE = "routes"


def load_routes(path: str | Path) -> RouteCollection:
    """Load a routes file into a RouteCollection.

    Raises:
        RouteFileNotFound: *path* does not exist.
        RouteConfigError: The file cannot be parsed, does not hold a
            mapping, or an entry is malformed.
    """
    collection = RouteCollection.from_dict(load_route_config(path))
    logger.debug("Loaded %d routes from %s", len(collection), path)
    return collection


def load_route_config(path: str | Path) -> dict[str, Any]:
    """Read *path* and return its raw route configuration mapping."""
    file = Path(path)
    if not file.is_file():
        raise RouteFileNotFound(str(path))

    suffix = file.suffix.lower()
    if suffix == ".py":
        data = _load_python(file)
    elif suffix == ".json":
        data = _parse(file, json.loads, json.JSONDecodeError)
    elif suffix == ".toml":
        data = _parse(file, tomllib.loads, tomllib.TOMLDecodeError)
    elif suffix in (".yaml", ".yml"):
        data = _parse(file, yaml.safe_load, yaml.YAMLError)
    else:
        msg = (
            f"Unsupported routes file {str(file)!r}: "
            "expected a .py, .json, .toml, .yaml or .yml file."
        )
        raise RouteConfigError(msg)

    if not isinstance(data, Mapping):
        msg = f"Routes file {str(file)!r} must return a mapping, got {type(data).__name__}."
        raise RouteConfigError(msg)
    return dict(data)


def _parse(file: Path, loads: Any, error: type[Exception]) -> object:
    try:
        return loads(file.read_text(encoding="utf-8"))
    except error as exc:
        msg = f"Failed to parse routes file {str(file)!r}: {exc}"
        raise RouteConfigError(msg) from exc


def _load_python(file: Path) -> object:
    """Execute a Python routes file in isolation and return its ``routes``.

    Uses ``importlib.util.spec_from_file_location`` so nothing is added to
    ``sys.path`` or ``sys.modules``.
    """
    spec = importlib.util.spec_from_file_location(f"waypoint_routes.{file.stem}", file)
    if spec is None or spec.loader is None:
        msg = f"Cannot import routes file {str(file)!r}."
        raise RouteConfigError(msg)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Failed to load routes module {str(file)!r}: {exc}"
        raise RouteConfigError(msg) from exc

    if not hasattr(module, ROUTES_ATTRIBUTE):
        msg = f"Routes file {str(file)!r} must define a module-level {ROUTES_ATTRIBUTE!r} mapping."
        raise RouteConfigError(msg)
    return getattr(module, ROUTES_ATTRIBUTE)
