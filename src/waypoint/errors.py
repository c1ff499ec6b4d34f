"""Waypoint exception hierarchy.

Shared across the compiler, collection, matcher, generator, and loader so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class RoutingError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(RoutingError):
    """Raised when a route template or router configuration is invalid.

    Typically surfaces during application bootstrap, while routes are
    being declared and compiled.
    """


class RouteConfigError(ConfigurationError):
    """Declarative route configuration is malformed.

    Raised when an entry lacks ``path``, a field has the wrong shape, or
    a routes file does not evaluate to a mapping.
    """


class RouteFileNotFound(RouteConfigError):  # noqa: N818
    """A routes file passed to the loader does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Routes file {path!r} does not exist.")


class DuplicateRouteName(ConfigurationError):  # noqa: N818
    """A route name is already registered in the collection."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        super().__init__(detail or f"Route {name!r} already exists in the collection.")


@dataclass(frozen=True, slots=True)
class HTTPError(RoutingError):
    """A matching error that maps directly to an HTTP status code.

    The dispatch pipeline catches these and turns them into responses;
    the routing engine itself never renders anything.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the path, or generation named an unknown route.

    ``path`` is set for matching failures, ``name`` for generation ones.
    """

    def __init__(
        self,
        detail: str = "Not Found",
        *,
        path: str | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(status=404, detail=detail)
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "name", name)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — a route matched the path but not the request method.

    ``allowed`` is the union of methods accepted by every route whose path
    matched. Building the ``Allow`` header from it is up to the caller.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        default_detail = f"Method not allowed. Allowed methods: {', '.join(sorted(allowed))}"
        super().__init__(status=405, detail=detail or default_detail)
        object.__setattr__(self, "allowed", frozenset(allowed))


class GenerationError(RoutingError, ValueError):
    """Base for errors raised while generating a path from a route name."""


@dataclass(frozen=True, slots=True)
class MissingMandatoryParameters(GenerationError):  # noqa: N818
    """Generation left one or more route variables without a value."""

    route: str
    missing: tuple[str, ...]

    def __str__(self) -> str:
        return f"Route {self.route!r} requires parameters: {', '.join(self.missing)}"


@dataclass(frozen=True, slots=True)
class ParameterRequirementViolation(GenerationError):  # noqa: N818
    """A generation parameter does not satisfy its route requirement."""

    route: str
    parameter: str
    requirement: str
    value: str

    def __str__(self) -> str:
        return (
            f"Parameter {self.parameter!r} for route {self.route!r} must match "
            f"{self.requirement!r}, {self.value!r} given."
        )
