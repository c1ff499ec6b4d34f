"""Template compilation — turns ``{name}`` templates into anchored regexes.

A template is parsed into literal and variable segments once, then
assembled into a single pattern with one named group per variable.
Routes compile eagerly, so matching never rebuilds a pattern string.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.errors import ConfigurationError
from waypoint.routing.params import CONVERTERS, DEFAULT_REQUIREMENT

_VARIABLE_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)(?::([A-Za-z_][A-Za-z0-9_]*))?\}")
_FLASK_PARAM_RE = re.compile(r"<(?:[A-Za-z_]+:)?[A-Za-z_][A-Za-z0-9_]*>")

# Characters that may separate an optional trailing variable from what precedes it
SEPARATORS = "/,;.:-_~+*=@|"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed piece of a route template.

    Literal:  ``/blog/``  (is_param=False)
    Variable: ``{page}``  (is_param=True, param_name="page")
    Typed:    ``{id:int}`` (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """The immutable matcher a Route carries.

    ``segments[optional_from:]`` is the run of trailing variables (and the
    literals between them) that a path may omit. ``lead_separator`` is the
    separator character that is omitted together with the first of them.
    """

    regex: re.Pattern[str]
    variables: tuple[str, ...]
    segments: tuple[PathSegment, ...]
    optional_from: int
    lead_separator: str
    requirements: dict[str, str]
    constraints: dict[str, re.Pattern[str]]

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    @property
    def optional_variables(self) -> tuple[str, ...]:
        return tuple(
            s.param_name for s in self.segments[self.optional_from :] if s.param_name
        )


def parse_template(template: str) -> list[PathSegment]:
    """Split a template into literal and variable segments, left to right.

    Examples::

        "/blog"            -> [PathSegment("/blog")]
        "/blog/{page}"     -> [PathSegment("/blog/"), PathSegment("{page}", is_param=True, ...)]
        "/users/{id:int}"  -> [PathSegment("/users/"), PathSegment("{id:int}", param_type="int")]
        "/{a}{b}"          -> [PathSegment("/"), PathSegment("{a}", ...), PathSegment("{b}", ...)]
    """
    if flask_param := _FLASK_PARAM_RE.search(template):
        msg = (
            f"Route template {template!r} uses <param> syntax ({flask_param.group(0)}). "
            "Waypoint placeholders use {param}, e.g. '/share/{slug}'."
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    seen: set[str] = set()
    position = 0
    for token in _VARIABLE_RE.finditer(template):
        if token.start() > position:
            segments.append(PathSegment(value=template[position : token.start()]))

        name, param_type = token.group(1), token.group(2) or "str"
        if param_type not in CONVERTERS:
            msg = (
                f"Unknown converter {param_type!r} for variable {name!r} in {template!r}. "
                f"Known converters: {', '.join(sorted(CONVERTERS))}."
            )
            raise ConfigurationError(msg)
        if name in seen:
            msg = f"Variable {name!r} appears more than once in route template {template!r}."
            raise ConfigurationError(msg)
        seen.add(name)

        segments.append(
            PathSegment(value=token.group(0), is_param=True, param_name=name, param_type=param_type)
        )
        position = token.end()

    if position < len(template):
        segments.append(PathSegment(value=template[position:]))
    return segments


def _optional_start(segments: list[PathSegment], defaults: Mapping[str, Any]) -> int:
    """Index of the first segment of the elidable tail, or len(segments)."""
    start = len(segments)
    # Trailing literal text pins every variable in place
    if not segments or not segments[-1].is_param:
        return start
    for index in range(len(segments) - 1, -1, -1):
        segment = segments[index]
        if not segment.is_param:
            continue
        if segment.param_name not in defaults:
            break
        start = index
    return start


def _lead_separator(segments: list[PathSegment], optional_from: int) -> str:
    if optional_from == 0 or optional_from >= len(segments):
        return ""
    lead = segments[optional_from - 1]
    if lead.is_param or lead.value[-1] not in SEPARATORS:
        return ""
    # "/{page}": keep the root slash so "/" still matches
    if optional_from == 1 and lead.value == "/":
        return ""
    return lead.value[-1]


def compile_template(
    template: str,
    defaults: Mapping[str, Any] | None = None,
    requirements: Mapping[str, str] | None = None,
) -> CompiledPattern:
    """Compile a template into a fully anchored regex with named groups.

    Each variable's group uses ``requirements[name]``, else the converter
    pattern, else ``[^/]+``. Trailing variables that all have defaults are
    wrapped in nested optional groups, so ``/blog/{page}`` with a ``page``
    default matches both ``/blog`` and ``/blog/7`` while ``/a/{x}/{y}``
    cannot omit ``x`` and still supply ``y``.

    Raises ``ConfigurationError`` for malformed templates or requirements.
    """
    defaults = defaults or {}
    requirements = requirements or {}
    segments = parse_template(template)

    effective: dict[str, str] = {}
    constraints: dict[str, re.Pattern[str]] = {}
    for segment in segments:
        if not segment.param_name:
            continue
        name = segment.param_name
        if name in requirements:
            effective[name] = requirements[name]
        elif segment.param_type != "str":
            effective[name] = CONVERTERS[segment.param_type]
        else:
            continue
        try:
            constraints[name] = re.compile(effective[name])
        except re.error as exc:
            msg = f"Invalid requirement {effective[name]!r} for variable {name!r}: {exc}"
            raise ConfigurationError(msg) from exc

    def group(segment: PathSegment) -> str:
        name = segment.param_name or ""
        return f"(?P<{name}>{effective.get(name, DEFAULT_REQUIREMENT)})"

    optional_from = _optional_start(segments, defaults)
    lead_separator = _lead_separator(segments, optional_from)

    parts: list[str] = []
    for index, segment in enumerate(segments[:optional_from]):
        if not segment.is_param:
            text = segment.value
            if index == optional_from - 1 and lead_separator:
                text = text[: -len(lead_separator)]
            parts.append(re.escape(text))
        else:
            parts.append(group(segment))

    # Each optional variable plus the literal before it is one unit;
    # units nest so a later one only matches when the earlier one did.
    units: list[str] = []
    prefix = lead_separator
    for segment in segments[optional_from:]:
        if segment.is_param:
            units.append(re.escape(prefix) + group(segment))
            prefix = ""
        else:
            prefix = segment.value
    tail = ""
    for unit in reversed(units):
        tail = f"(?:{unit}{tail})?"

    source = "^" + "".join(parts) + tail + "$"
    try:
        regex = re.compile(source)
    except re.error as exc:
        msg = f"Route template {template!r} compiles to an invalid pattern: {exc}"
        raise ConfigurationError(msg) from exc

    return CompiledPattern(
        regex=regex,
        variables=tuple(s.param_name for s in segments if s.param_name),
        segments=tuple(segments),
        optional_from=optional_from,
        lead_separator=lead_separator,
        requirements=effective,
        constraints=constraints,
    )
