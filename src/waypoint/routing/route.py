"""Route — one routed template plus its matching and generation metadata."""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from waypoint.routing.compiler import CompiledPattern, compile_template

# Synthetic parameter naming the matched route
ROUTE_KEY = "_route"


class Mismatch(Enum):
    """Why ``Route.match`` rejected a request.

    ``PATH`` folds structural and requirement failures together; ``METHOD``
    means the path fit but the method is not allowed (405 rather than 404).
    """

    PATH = "path"
    METHOD = "method"


class Route:
    """A single route: template, defaults, requirements, and methods.

    Usage::

        route = Route(
            "/article/{id}",
            defaults={"_controller": "ArticleController.show"},
            requirements={"id": r"\\d+"},
            methods=["GET"],
        )
        route.match("/article/42")  # {"_controller": ..., "id": "42"}

    The compiled pattern is rebuilt eagerly by the constructor and every
    mutator, so once bootstrap is over readers only ever see a finished
    matcher.
    """

    __slots__ = ("_compiled", "_defaults", "_methods", "_path", "_requirements")

    def __init__(
        self,
        path: str,
        defaults: Mapping[str, Any] | None = None,
        requirements: Mapping[str, str] | None = None,
        methods: Iterable[str] | None = None,
    ) -> None:
        self._path = path
        self._defaults: dict[str, Any] = dict(defaults or {})
        self._requirements: dict[str, str] = dict(requirements or {})
        self._methods = _normalize_methods(methods)
        self._compiled = self._compile()

    def __repr__(self) -> str:
        methods = ", ".join(sorted(self._methods)) or "ANY"
        return f"Route({self._path!r}, methods=[{methods}])"

    def _compile(self) -> CompiledPattern:
        return compile_template(self._path, self._defaults, self._requirements)

    # -- Read-only view --

    @property
    def path(self) -> str:
        return self._path

    @property
    def defaults(self) -> Mapping[str, Any]:
        return MappingProxyType(self._defaults)

    @property
    def requirements(self) -> Mapping[str, str]:
        return MappingProxyType(self._requirements)

    @property
    def methods(self) -> frozenset[str]:
        return self._methods

    @property
    def variables(self) -> tuple[str, ...]:
        """Names of the template's placeholders, in template order."""
        return self._compiled.variables

    @property
    def compiled(self) -> CompiledPattern:
        return self._compiled

    @property
    def pattern(self) -> str:
        """Source of the compiled regex."""
        return self._compiled.pattern

    def supports_method(self, method: str) -> bool:
        """True when the route accepts *method* (any method if unrestricted)."""
        return not self._methods or method.upper() in self._methods

    def has_default(self, name: str) -> bool:
        return name in self._defaults

    def get_default(self, name: str, fallback: Any = None) -> Any:
        return self._defaults.get(name, fallback)

    def get_requirement(self, name: str) -> str | None:
        return self._requirements.get(name)

    # -- Mutation (bootstrap only) --

    def set_path(self, path: str) -> None:
        self._compiled = compile_template(path, self._defaults, self._requirements)
        self._path = path

    def set_defaults(self, defaults: Mapping[str, Any]) -> None:
        defaults = dict(defaults)
        self._compiled = compile_template(self._path, defaults, self._requirements)
        self._defaults = defaults

    def set_default(self, name: str, value: Any) -> None:
        self.set_defaults({**self._defaults, name: value})

    def set_requirements(self, requirements: Mapping[str, str]) -> None:
        requirements = dict(requirements)
        self._compiled = compile_template(self._path, self._defaults, requirements)
        self._requirements = requirements

    def add_requirement(self, name: str, regex: str) -> None:
        self.set_requirements({**self._requirements, name: regex})

    def set_methods(self, methods: Iterable[str]) -> None:
        self._methods = _normalize_methods(methods)

    # -- Matching --

    def match(
        self,
        path: str,
        method: str = "GET",
        *,
        route_name: str | None = None,
    ) -> dict[str, Any] | Mismatch:
        """Match *path* and *method* against this route.

        Returns the parameter map on success: defaults first, captured
        values over them, and the default for every optional variable the
        path left out. When *route_name* is given it is added under
        ``_route``. Returns a ``Mismatch`` otherwise.

        The path is compared as-is (no case or slash normalization); the
        method is compared case-insensitively.
        """
        # fullmatch so "$" cannot accept a trailing newline
        found = self._compiled.regex.fullmatch(path)
        if found is None:
            return Mismatch.PATH
        if not self.supports_method(method):
            return Mismatch.METHOD

        params = dict(self._defaults)
        for name, value in found.groupdict().items():
            if value is not None:
                params[name] = value
        if route_name is not None:
            params[ROUTE_KEY] = route_name
        return params

    def to_dict(self) -> dict[str, Any]:
        """Declarative shape, as accepted by ``RouteCollection.from_dict``."""
        return {
            "path": self._path,
            "defaults": dict(self._defaults),
            "requirements": dict(self._requirements),
            "methods": sorted(self._methods),
        }


def _normalize_methods(methods: Iterable[str] | None) -> frozenset[str]:
    if isinstance(methods, str):
        methods = [methods]
    return frozenset(m.upper() for m in methods or ())
