"""URL helpers for templates.

Binds a Router to the two calls templates need, and exposes them as
globals for whichever template environment the application uses::

    helper = RouterHelper(router)
    env.globals.update(helper.template_globals())

    # in a template
    <a href="{{ url_for('article_show', id=post.id) }}">Read more</a>
    <link rel="canonical" href="{{ absolute_url_for('article_show', id=post.id) }}">
"""

from collections.abc import Callable, Mapping
from typing import Any

from waypoint.routing.router import Router


class RouterHelper:
    """Path and URL generation for the view layer."""

    __slots__ = ("_router",)

    name = "router"

    def __init__(self, router: Router) -> None:
        self._router = router

    def path(self, name: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        """Relative path for route *name*, e.g. ``/blog/123``."""
        return self._router.generate(name, {**(params or {}), **kwargs})

    def url(self, name: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> str:
        """Absolute URL for route *name*, using ``RouterConfig.base_url``."""
        return self._router.generate(name, {**(params or {}), **kwargs}, absolute=True)

    def template_globals(self) -> dict[str, Callable[..., str]]:
        return {
            "url_for": self.path,
            "absolute_url_for": self.url,
        }
