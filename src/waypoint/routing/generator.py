"""UrlGenerator — builds paths from route names and parameter values.

The inverse of matching: variables are substituted into the template,
trailing optional variables the caller left out are elided, and leftover
parameters become the query string.
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from waypoint.config import RouterConfig
from waypoint.errors import (
    ConfigurationError,
    GenerationError,
    MissingMandatoryParameters,
    ParameterRequirementViolation,
    RouteNotFound,
)
from waypoint.routing.collection import RouteCollection
from waypoint.routing.compiler import CompiledPattern
from waypoint.routing.route import Route

logger = logging.getLogger("waypoint.routing")


class UrlGenerator:
    """Generates paths for named routes.

    Usage::

        generator = UrlGenerator(routes)
        generator.generate("home")                                   # "/"
        generator.generate("article_show", {"id": 42})               # "/article/42"
        generator.generate("article_show", {"id": 42, "ref": "x"})   # "/article/42?ref=x"
    """

    __slots__ = ("_config", "_routes")

    def __init__(self, routes: RouteCollection, config: RouterConfig | None = None) -> None:
        self._routes = routes
        self._config = config or RouterConfig()

    @property
    def routes(self) -> RouteCollection:
        return self._routes

    def has_route(self, name: str) -> bool:
        return self._routes.has(name)

    def generate(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        *,
        absolute: bool = False,
    ) -> str:
        """Generate the path for route *name*.

        Each variable takes its value from *params*, else from the route's
        defaults. Parameters that are not variables, and whose key does not
        start with the internal prefix, are appended as a query string.

        Raises ``RouteNotFound`` for an unknown name,
        ``MissingMandatoryParameters`` listing every variable without a
        value, and ``ParameterRequirementViolation`` for a value that does
        not satisfy its requirement.
        """
        params = dict(params or {})
        route = self._routes.get(name)
        compiled = route.compiled

        values = _resolve_values(name, route, params)
        for variable, value in values.items():
            constraint = compiled.constraints.get(variable)
            if constraint is not None and constraint.fullmatch(value) is None:
                raise ParameterRequirementViolation(
                    route=name,
                    parameter=variable,
                    requirement=compiled.requirements[variable],
                    value=value,
                )

        supplied = {key for key, value in params.items() if value is not None}
        url = _substitute(compiled, values, supplied)
        if url != "/" and url.endswith("/"):
            url = url[:-1]

        prefix = self._config.internal_prefix
        extra = {
            key: value
            for key, value in params.items()
            if key not in values and not key.startswith(prefix) and value is not None
        }
        if extra:
            url = f"{url}?{urlencode(extra, doseq=True)}"

        if absolute:
            if not self._config.base_url:
                msg = "Absolute URL generation requires RouterConfig.base_url."
                raise ConfigurationError(msg)
            url = self._config.base_url.rstrip("/") + url
        return url

    def generate_multiple(
        self,
        routes_with_params: Mapping[str, Mapping[str, Any] | None],
        *,
        strict: bool | None = None,
    ) -> dict[str, str]:
        """Generate a path for each ``name -> params`` entry.

        Lenient by default: entries that fail (unknown route, missing or
        invalid parameters) are left out of the result. With ``strict=True``
        the first failure is raised instead. The default follows
        ``RouterConfig.strict_generation``.
        """
        if strict is None:
            strict = self._config.strict_generation
        urls: dict[str, str] = {}
        for name, params in routes_with_params.items():
            try:
                urls[name] = self.generate(name, params)
            except (RouteNotFound, GenerationError) as exc:
                if strict:
                    raise
                logger.debug("Skipping route %r in batch generation: %s", name, exc)
        return urls

    def generate_with_query(
        self,
        name: str,
        params: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> str:
        """Generate with path parameters and query parameters passed apart."""
        return self.generate(name, {**(params or {}), **(query or {})})


def _resolve_values(name: str, route: Route, params: Mapping[str, Any]) -> dict[str, str]:
    """Stringified value for every variable; reports all missing ones at once."""
    values: dict[str, str] = {}
    missing: list[str] = []
    for variable in route.variables:
        value = params.get(variable)
        if value is None:
            value = route.get_default(variable)
        if value is None:
            missing.append(variable)
        else:
            values[variable] = str(value)
    if missing:
        raise MissingMandatoryParameters(route=name, missing=tuple(missing))
    return values


def _substitute(compiled: CompiledPattern, values: Mapping[str, str], supplied: set[str]) -> str:
    """Join the template segments, dropping trailing optional variables not supplied."""
    segments = compiled.segments
    cut = len(segments)
    while cut > compiled.optional_from:
        segment = segments[cut - 1]
        if segment.param_name in supplied:
            break
        cut -= 1
        # The literal between two optional variables goes with the later one
        if cut > compiled.optional_from and not segments[cut - 1].is_param:
            cut -= 1

    url = "".join(
        values[s.param_name] if s.param_name else s.value for s in segments[:cut]
    )
    if cut == compiled.optional_from and compiled.lead_separator:
        url = url[: -len(compiled.lead_separator)]
    return url or "/"
