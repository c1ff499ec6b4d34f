"""Router — facade over a RouteCollection, its matcher, and its generator.

The only entry point collaborators need: the dispatch pipeline calls
``match`` once per request, templates and response builders call
``generate``.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from waypoint.config import RouterConfig
from waypoint.routing.collection import RouteCollection
from waypoint.routing.generator import UrlGenerator
from waypoint.routing.matcher import UrlMatcher
from waypoint.routing.route import Route


class Router:
    """Matches request paths and generates URLs for one RouteCollection.

    Usage::

        router = Router.from_dict({
            "home": {"path": "/", "defaults": {"_controller": "home.index"}},
            "article_show": {
                "path": "/article/{id}",
                "requirements": {"id": r"\\d+"},
                "methods": ["GET"],
            },
        })
        router.match("/article/42")                 # {..., "id": "42", "_route": "article_show"}
        router.generate("article_show", {"id": 42})  # "/article/42"

    The matcher and generator are built on first use, at most once per
    Router even when several threads get there together.
    """

    __slots__ = ("_generator", "_lock", "_matcher", "_routes", "config")

    def __init__(
        self,
        routes: RouteCollection | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        self._routes = routes if routes is not None else RouteCollection()
        self.config: RouterConfig = config or RouterConfig()
        self._matcher: UrlMatcher | None = None
        self._generator: UrlGenerator | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Router({len(self._routes)} routes)"

    # -- Lazy components --

    @property
    def matcher(self) -> UrlMatcher:
        """The UrlMatcher, built once on first access."""
        if self._matcher is None:
            with self._lock:
                if self._matcher is None:
                    self._matcher = UrlMatcher(self._routes)
        return self._matcher

    @property
    def generator(self) -> UrlGenerator:
        """The UrlGenerator, built once on first access."""
        if self._generator is None:
            with self._lock:
                if self._generator is None:
                    self._generator = UrlGenerator(self._routes, self.config)
        return self._generator

    # -- Matching --

    def match(self, path: str, method: str = "GET") -> dict[str, Any]:
        """Resolve *path* and *method* to the matched route's parameters.

        Raises ``RouteNotFound`` (404) or ``MethodNotAllowed`` (405).
        """
        return self.matcher.match(path, method)

    def match_route_name(self, path: str, method: str = "GET") -> str:
        return self.matcher.match_route_name(path, method)

    def has_match(self, path: str, method: str = "GET") -> bool:
        return self.matcher.has_match(path, method)

    # -- Generation --

    def generate(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        absolute: bool = False,
    ) -> str:
        """Generate the path (or absolute URL) for route *name*."""
        return self.generator.generate(name, params, absolute=absolute)

    def generate_multiple(
        self,
        routes_with_params: Mapping[str, Mapping[str, Any] | None],
        *,
        strict: bool | None = None,
    ) -> dict[str, str]:
        return self.generator.generate_multiple(routes_with_params, strict=strict)

    def generate_with_query(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> str:
        return self.generator.generate_with_query(name, params, query)

    # -- Collection access --

    @property
    def routes(self) -> RouteCollection:
        return self._routes

    def add_route(self, name: str, route: Route) -> None:
        self._routes.add(name, route)

    def has_route(self, name: str) -> bool:
        return self._routes.has(name)

    def get_route(self, name: str) -> Route:
        return self._routes.get(name)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return self._routes.to_dict()

    # -- Factories --

    @classmethod
    def from_dict(
        cls,
        config: Mapping[str, Any],
        router_config: RouterConfig | None = None,
    ) -> Router:
        """Build a router from declarative route configuration."""
        return cls(RouteCollection.from_dict(config), router_config)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        router_config: RouterConfig | None = None,
    ) -> Router:
        """Build a router from a routes file (.py, .json, .toml, .yaml).

        Raises ``RouteFileNotFound`` if the file is missing and
        ``RouteConfigError`` if it does not hold a route mapping.
        """
        from waypoint.routing.loader import load_routes

        return cls(load_routes(path), router_config)
