"""RouteCollection — the ordered, name-keyed registry of routes.

Registration order is match priority: the first route added is the first
one tried. Collections are built during bootstrap and read-only after.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from waypoint.errors import DuplicateRouteName, RouteConfigError, RouteNotFound
from waypoint.routing.route import Route

logger = logging.getLogger("waypoint.routing")

_CONFIG_KEYS = frozenset({"path", "defaults", "requirements", "methods"})


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Declarative configuration for a single route.

    The schema behind ``RouteCollection.from_dict`` and the file loader::

        {"path": "/article/{id}",
         "defaults": {"_controller": "article.show"},
         "requirements": {"id": r"\\d+"},
         "methods": ["GET"]}

    Only ``path`` is required.
    """

    path: str
    defaults: dict[str, Any] = field(default_factory=dict)
    requirements: dict[str, str] = field(default_factory=dict)
    methods: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, name: str, entry: object) -> RouteConfig:
        """Validate one configuration entry.

        Raises ``RouteConfigError`` describing the first schema violation.
        """
        if not isinstance(entry, Mapping):
            msg = f"Route {name!r} must be a mapping, got {type(entry).__name__}."
            raise RouteConfigError(msg)
        if "path" not in entry:
            msg = f"Route {name!r} must have a 'path' key."
            raise RouteConfigError(msg)

        unknown = set(entry) - _CONFIG_KEYS
        if unknown:
            msg = (
                f"Route {name!r} has unknown keys: {', '.join(sorted(map(str, unknown)))}. "
                f"Allowed keys: {', '.join(sorted(_CONFIG_KEYS))}."
            )
            raise RouteConfigError(msg)

        path = entry["path"]
        if not isinstance(path, str):
            msg = f"Route {name!r}: 'path' must be a string, got {type(path).__name__}."
            raise RouteConfigError(msg)

        defaults = entry.get("defaults") or {}
        if not isinstance(defaults, Mapping):
            msg = f"Route {name!r}: 'defaults' must be a mapping."
            raise RouteConfigError(msg)

        requirements = entry.get("requirements") or {}
        if not isinstance(requirements, Mapping) or not all(
            isinstance(v, str) for v in requirements.values()
        ):
            msg = f"Route {name!r}: 'requirements' must map variable names to regex strings."
            raise RouteConfigError(msg)

        methods = entry.get("methods") or ()
        if isinstance(methods, str):
            methods = (methods,)
        if not isinstance(methods, Iterable) or not all(isinstance(m, str) for m in methods):
            msg = f"Route {name!r}: 'methods' must be a list of HTTP method names."
            raise RouteConfigError(msg)

        return cls(
            path=path,
            defaults=dict(defaults),
            requirements=dict(requirements),
            methods=tuple(methods),
        )

    def build(self) -> Route:
        return Route(self.path, self.defaults, self.requirements, self.methods)


class RouteCollection:
    """Ordered mapping of unique route names to routes.

    Usage::

        routes = RouteCollection()
        routes.add("home", Route("/"))
        routes.add("article_show", Route("/article/{id}", requirements={"id": r"\\d+"}))

        for name, route in routes.items():
            print(name, route.path)

    Order lives in an explicit list of ``(name, route)`` pairs; a
    name -> index table answers existence checks.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self) -> None:
        self._entries: list[tuple[str, Route]] = []
        self._index: dict[str, int] = {}

    def __repr__(self) -> str:
        return f"RouteCollection({len(self._entries)} routes)"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        """Iterate route names in registration order."""
        return (name for name, _ in self._entries)

    def items(self) -> Iterator[tuple[str, Route]]:
        """Iterate ``(name, route)`` pairs in registration order."""
        return iter(list(self._entries))

    def _reindex(self) -> None:
        self._index = {name: i for i, (name, _) in enumerate(self._entries)}

    # -- Registry --

    def add(self, name: str, route: Route) -> None:
        """Register *route* under *name*, after every existing route.

        Raises ``DuplicateRouteName`` if the name is taken.
        """
        if name in self._index:
            raise DuplicateRouteName(name)
        self._index[name] = len(self._entries)
        self._entries.append((name, route))
        logger.debug("Route %r added: %s", name, route.path)

    def get(self, name: str) -> Route:
        """Return the route registered as *name*.

        Raises ``RouteNotFound`` if there is none.
        """
        index = self._index.get(name)
        if index is None:
            raise RouteNotFound(f"Route {name!r} does not exist.", name=name)
        return self._entries[index][1]

    def has(self, name: str) -> bool:
        return name in self._index

    def remove(self, name: str) -> bool:
        """Remove *name*; returns False when nothing was registered under it."""
        index = self._index.get(name)
        if index is None:
            return False
        del self._entries[index]
        self._reindex()
        return True

    def all(self) -> dict[str, Route]:
        """Name -> route mapping in registration order."""
        return dict(self._entries)

    def names(self) -> list[str]:
        return [name for name, _ in self._entries]

    def clear(self) -> None:
        self._entries.clear()
        self._index.clear()

    def add_collection(self, other: RouteCollection, override_existing: bool = False) -> None:
        """Merge *other*'s routes, in order, after this collection's routes.

        A name already present raises ``DuplicateRouteName`` unless
        *override_existing* is true; the incoming route then takes over the
        existing name's slot, so the original order is kept. Nothing is
        merged when a conflict is raised.
        """
        incoming = list(other.items())
        if not override_existing:
            for name, _ in incoming:
                if name in self._index:
                    detail = (
                        f"Route {name!r} already exists. "
                        "Pass override_existing=True to replace it."
                    )
                    raise DuplicateRouteName(name, detail)

        for name, route in incoming:
            index = self._index.get(name)
            if index is None:
                self._index[name] = len(self._entries)
                self._entries.append((name, route))
            else:
                self._entries[index] = (name, route)

    # -- Bulk transformations --

    def add_prefix(self, prefix: str) -> None:
        """Prepend *prefix* to every route template.

        A trailing slash is stripped first, so ``"/admin/"`` and ``"/admin"``
        both turn ``/users`` into ``/admin/users``.
        """
        prefix = prefix.rstrip("/")
        if not prefix:
            return
        for _, route in self._entries:
            route.set_path(prefix + route.path)

    def add_name_prefix(self, prefix: str) -> None:
        """Rename every route to ``prefix + name``, keeping the order."""
        if not prefix:
            return
        self._entries = [(prefix + name, route) for name, route in self._entries]
        self._reindex()

    def add_defaults(self, defaults: Mapping[str, Any]) -> None:
        """Fill every route's missing defaults. Per-route values win."""
        if not defaults:
            return
        for _, route in self._entries:
            route.set_defaults({**defaults, **route.defaults})

    def add_requirements(self, requirements: Mapping[str, str]) -> None:
        """Fill every route's missing requirements. Per-route values win."""
        if not requirements:
            return
        for _, route in self._entries:
            route.set_requirements({**requirements, **route.requirements})

    def set_methods(self, methods: Iterable[str]) -> None:
        """Overwrite every route's allowed methods."""
        methods = list(methods)
        for _, route in self._entries:
            route.set_methods(methods)

    # -- Declarative form --

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> RouteCollection:
        """Build a collection from ``name -> {path, defaults?, requirements?, methods?}``.

        Example::

            routes = RouteCollection.from_dict({
                "home": {"path": "/", "defaults": {"_controller": "home.index"}},
                "about": {"path": "/about", "defaults": {"_controller": "home.about"}},
            })

        Raises ``RouteConfigError`` for malformed entries.
        """
        if not isinstance(config, Mapping):
            msg = f"Route configuration must be a mapping, got {type(config).__name__}."
            raise RouteConfigError(msg)
        collection = cls()
        for name, entry in config.items():
            collection.add(str(name), RouteConfig.from_mapping(str(name), entry).build())
        return collection

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Inverse of ``from_dict``: one entry per route, in order."""
        return {name: route.to_dict() for name, route in self._entries}
