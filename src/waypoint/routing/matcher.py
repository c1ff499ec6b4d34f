"""UrlMatcher — resolves a path and method to a route's parameters.

Routes are tried in registration order and the first full match wins,
even when a later route is more specific.
"""

import logging
from typing import Any

from waypoint.errors import MethodNotAllowed, RouteNotFound
from waypoint.routing.collection import RouteCollection
from waypoint.routing.route import ROUTE_KEY, Mismatch

logger = logging.getLogger("waypoint.routing")


class UrlMatcher:
    """Matches request paths against a RouteCollection.

    Usage::

        matcher = UrlMatcher(routes)
        try:
            params = matcher.match("/article/42")
            # {"_controller": "...", "id": "42", "_route": "article_show"}
        except RouteNotFound:
            ...  # 404
        except MethodNotAllowed as exc:
            ...  # 405, exc.allowed
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: RouteCollection) -> None:
        self._routes = routes

    @property
    def routes(self) -> RouteCollection:
        return self._routes

    def match(self, path: str, method: str = "GET") -> dict[str, Any]:
        """Return the parameters of the first route matching *path* and *method*.

        Raises ``MethodNotAllowed`` if no route matched fully but at least
        one matched the path; ``allowed`` is the union of their methods.
        Raises ``RouteNotFound`` otherwise.
        """
        allowed: set[str] = set()
        for name, route in self._routes.items():
            result = route.match(path, method, route_name=name)
            if result is Mismatch.PATH:
                continue
            if result is Mismatch.METHOD:
                allowed |= route.methods
                continue
            logger.debug("Matched %s %r to route %r", method, path, name)
            return result

        if allowed:
            logger.debug("Path %r matched, method %s not in %s", path, method, sorted(allowed))
            raise MethodNotAllowed(frozenset(allowed))
        logger.debug("No route found for %s %r", method, path)
        raise RouteNotFound(f"No route found for {path!r}", path=path)

    def match_route_name(self, path: str, method: str = "GET") -> str:
        """Like ``match`` but returns only the matched route's name."""
        return self.match(path, method)[ROUTE_KEY]

    def has_match(self, path: str, method: str = "GET") -> bool:
        """True when ``match`` would succeed; never raises for a miss."""
        try:
            self.match(path, method)
        except (RouteNotFound, MethodNotAllowed):
            return False
        return True
