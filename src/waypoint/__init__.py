"""Waypoint — a routing engine for Python web applications.

Compiles ``{name}`` path templates into matchers, resolves a request path
and method to a named route, and generates paths back from route names.

Basic usage::

    from waypoint import Route, RouteCollection, Router

    routes = RouteCollection()
    routes.add("blog_list", Route("/blog/{page}", defaults={"page": 1},
                                  requirements={"page": r"\\d+"}))
    router = Router(routes)

    router.match("/blog")                      # {"page": 1, "_route": "blog_list"}
    router.generate("blog_list", {"page": 2})  # "/blog/2"
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DuplicateRouteName",
    "GenerationError",
    "HTTPError",
    "MethodNotAllowed",
    "MissingMandatoryParameters",
    "ParameterRequirementViolation",
    "Route",
    "RouteCollection",
    "RouteConfigError",
    "RouteFileNotFound",
    "RouteNotFound",
    "Router",
    "RouterConfig",
    "RouterHelper",
    "RoutingError",
    "UrlGenerator",
    "UrlMatcher",
]

_ERRORS = frozenset({
    "ConfigurationError",
    "DuplicateRouteName",
    "GenerationError",
    "HTTPError",
    "MethodNotAllowed",
    "MissingMandatoryParameters",
    "ParameterRequirementViolation",
    "RouteConfigError",
    "RouteFileNotFound",
    "RouteNotFound",
    "RoutingError",
})

_ROUTING = frozenset({"Route", "RouteCollection", "Router", "UrlGenerator", "UrlMatcher"})


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name in _ERRORS:
        from waypoint import errors

        return getattr(errors, name)

    if name in _ROUTING:
        from waypoint import routing

        return getattr(routing, name)

    if name == "RouterConfig":
        from waypoint.config import RouterConfig

        return RouterConfig

    if name == "RouterHelper":
        from waypoint.templating import RouterHelper

        return RouterHelper

    msg = f"module 'waypoint' has no attribute {name!r}"
    raise AttributeError(msg)
