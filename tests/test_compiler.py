"""Tests for waypoint.routing.compiler — template parsing and regex assembly."""

import pytest

from waypoint.errors import ConfigurationError
from waypoint.routing.compiler import PathSegment, compile_template, parse_template


class TestParseTemplate:
    def test_static(self) -> None:
        assert parse_template("/blog") == [PathSegment("/blog")]

    def test_variable(self) -> None:
        segments = parse_template("/blog/{page}")
        assert len(segments) == 2
        assert segments[0] == PathSegment("/blog/")
        assert segments[1].is_param is True
        assert segments[1].param_name == "page"
        assert segments[1].param_type == "str"
        assert segments[1].value == "{page}"

    def test_typed_variable(self) -> None:
        segments = parse_template("/users/{id:int}")
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "int"

    def test_literal_after_variable(self) -> None:
        segments = parse_template("/report/{id}.pdf")
        assert [s.value for s in segments] == ["/report/", "{id}", ".pdf"]

    def test_adjacent_variables(self) -> None:
        segments = parse_template("/{a}{b}")
        assert [s.value for s in segments] == ["/", "{a}", "{b}"]

    def test_root(self) -> None:
        assert parse_template("/") == [PathSegment("/")]

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_template("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "{param}" in str(exc_info.value)
        assert "/share/<slug>" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="uuid"):
            parse_template("/users/{id:uuid}")

    def test_rejects_duplicate_variable(self) -> None:
        with pytest.raises(ConfigurationError, match="more than once"):
            parse_template("/{id}/{id}")


class TestCompileTemplate:
    def test_static_pattern(self) -> None:
        compiled = compile_template("/about")
        assert compiled.pattern == "^/about$"
        assert compiled.variables == ()

    def test_requirement_becomes_named_group(self) -> None:
        compiled = compile_template("/article/{id}", requirements={"id": r"\d+"})
        assert compiled.pattern == r"^/article/(?P<id>\d+)$"
        assert compiled.variables == ("id",)

    def test_default_requirement(self) -> None:
        compiled = compile_template("/article/{slug}")
        assert "(?P<slug>[^/]+)" in compiled.pattern

    def test_literals_are_escaped(self) -> None:
        compiled = compile_template("/files/{name}.tar.gz")
        assert compiled.regex.fullmatch("/files/backup.tar.gz")
        assert compiled.regex.fullmatch("/files/backupXtarXgz") is None

    def test_anchored(self) -> None:
        compiled = compile_template("/blog")
        assert compiled.regex.fullmatch("/blog")
        assert compiled.regex.search("/blog/extra") is None
        assert compiled.regex.search("/prefix/blog") is None

    def test_variables_in_template_order(self) -> None:
        compiled = compile_template("/blog/{year}/{month}/{slug}")
        assert compiled.variables == ("year", "month", "slug")

    def test_converter_supplies_requirement(self) -> None:
        compiled = compile_template("/users/{id:int}")
        assert compiled.requirements == {"id": r"\d+"}
        assert compiled.regex.fullmatch("/users/42")
        assert compiled.regex.fullmatch("/users/alice") is None

    def test_explicit_requirement_beats_converter(self) -> None:
        compiled = compile_template("/users/{id:int}", requirements={"id": r"[0-9]{3}"})
        assert compiled.requirements == {"id": r"[0-9]{3}"}
        assert compiled.regex.fullmatch("/users/123")
        assert compiled.regex.fullmatch("/users/12") is None

    def test_only_constrained_variables_get_constraints(self) -> None:
        compiled = compile_template("/{section}/{id}", requirements={"id": r"\d+"})
        assert set(compiled.constraints) == {"id"}

    def test_requirement_for_unknown_variable_is_ignored(self) -> None:
        compiled = compile_template("/about", requirements={"id": r"\d+"})
        assert compiled.pattern == "^/about$"

    def test_invalid_requirement(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid requirement"):
            compile_template("/article/{id}", requirements={"id": "(unclosed"})


class TestOptionalTrailingVariables:
    def test_single_optional(self) -> None:
        compiled = compile_template("/blog/{page}", defaults={"page": 1})
        assert compiled.pattern == "^/blog(?:/(?P<page>[^/]+))?$"
        assert compiled.optional_variables == ("page",)
        assert compiled.regex.fullmatch("/blog")
        assert compiled.regex.fullmatch("/blog/7")
        assert compiled.regex.fullmatch("/blog/") is None

    def test_root_slash_is_kept(self) -> None:
        compiled = compile_template("/{page}", defaults={"page": 1})
        assert compiled.pattern == "^/(?:(?P<page>[^/]+))?$"
        assert compiled.regex.fullmatch("/")
        assert compiled.regex.fullmatch("/3")
        assert compiled.regex.fullmatch("") is None

    def test_nested_optionals(self) -> None:
        compiled = compile_template("/a/{x}/{y}", defaults={"x": 1, "y": 2})
        assert compiled.optional_variables == ("x", "y")
        assert compiled.regex.fullmatch("/a")
        assert compiled.regex.fullmatch("/a/1")
        assert compiled.regex.fullmatch("/a/1/2")
        # x cannot be omitted while y is supplied
        assert compiled.regex.fullmatch("/a//2") is None

    def test_only_trailing_run_is_optional(self) -> None:
        compiled = compile_template("/{a}/{b}", defaults={"b": 2})
        assert compiled.optional_variables == ("b",)
        assert compiled.regex.fullmatch("/1")
        assert compiled.regex.fullmatch("/1/2")
        assert compiled.regex.fullmatch("/") is None

    def test_default_before_required_is_not_optional(self) -> None:
        compiled = compile_template("/{a}/{b}", defaults={"a": 1})
        assert compiled.optional_variables == ()
        assert compiled.regex.fullmatch("/2") is None

    def test_trailing_literal_pins_variables(self) -> None:
        compiled = compile_template("/page/{n}.html", defaults={"n": 1})
        assert compiled.optional_variables == ()
        assert compiled.regex.fullmatch("/page/.html") is None
        assert compiled.regex.fullmatch("/page/2.html")

    def test_dot_separator(self) -> None:
        compiled = compile_template("/report.{_format}", defaults={"_format": "html"})
        assert compiled.lead_separator == "."
        assert compiled.regex.fullmatch("/report")
        assert compiled.regex.fullmatch("/report.pdf")

    def test_optional_with_requirement(self) -> None:
        compiled = compile_template(
            "/blog/{page}", defaults={"page": 1}, requirements={"page": r"\d+"}
        )
        assert compiled.regex.fullmatch("/blog")
        assert compiled.regex.fullmatch("/blog/3")
        assert compiled.regex.fullmatch("/blog/three") is None

    def test_non_variable_defaults_do_not_matter(self) -> None:
        compiled = compile_template("/about", defaults={"_controller": "about"})
        assert compiled.optional_variables == ()
        assert compiled.pattern == "^/about$"
