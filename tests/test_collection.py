"""Tests for waypoint.routing.collection — RouteCollection and RouteConfig."""

import pytest

from waypoint.errors import DuplicateRouteName, RouteConfigError, RouteNotFound
from waypoint.routing.collection import RouteCollection, RouteConfig
from waypoint.routing.route import Mismatch, Route


def _collection(*names: str) -> RouteCollection:
    routes = RouteCollection()
    for name in names:
        routes.add(name, Route(f"/{name}"))
    return routes


class TestRegistry:
    def test_add_and_get(self) -> None:
        routes = RouteCollection()
        route = Route("/")
        routes.add("home", route)
        assert routes.get("home") is route
        assert routes.has("home")
        assert "home" in routes
        assert len(routes) == 1

    def test_duplicate_name(self) -> None:
        routes = _collection("home")
        with pytest.raises(DuplicateRouteName) as exc_info:
            routes.add("home", Route("/other"))
        assert exc_info.value.name == "home"
        assert routes.get("home").path == "/home"

    def test_get_missing(self) -> None:
        with pytest.raises(RouteNotFound) as exc_info:
            RouteCollection().get("nope")
        assert exc_info.value.name == "nope"

    def test_remove(self) -> None:
        routes = _collection("a", "b", "c")
        assert routes.remove("b") is True
        assert routes.remove("b") is False
        assert routes.names() == ["a", "c"]
        assert routes.get("c").path == "/c"

    def test_iteration_preserves_insertion_order(self) -> None:
        routes = _collection("zeta", "alpha", "mid")
        assert list(routes) == ["zeta", "alpha", "mid"]
        assert [name for name, _ in routes.items()] == ["zeta", "alpha", "mid"]

    def test_all(self) -> None:
        routes = _collection("a", "b")
        everything = routes.all()
        assert list(everything) == ["a", "b"]
        assert everything["a"] is routes.get("a")

    def test_clear(self) -> None:
        routes = _collection("a", "b")
        routes.clear()
        assert len(routes) == 0
        assert not routes.has("a")


class TestAddCollection:
    def test_merge_in_order(self) -> None:
        routes = _collection("a", "b")
        routes.add_collection(_collection("c", "d"))
        assert routes.names() == ["a", "b", "c", "d"]

    def test_conflict_raises_and_merges_nothing(self) -> None:
        routes = _collection("a", "b")
        with pytest.raises(DuplicateRouteName) as exc_info:
            routes.add_collection(_collection("c", "b"))
        assert exc_info.value.name == "b"
        assert routes.names() == ["a", "b"]

    def test_override_replaces_in_place(self) -> None:
        routes = _collection("a", "b", "c")
        incoming = RouteCollection()
        replacement = Route("/b2")
        incoming.add("b", replacement)
        incoming.add("d", Route("/d"))

        routes.add_collection(incoming, override_existing=True)

        assert routes.names() == ["a", "b", "c", "d"]
        assert routes.get("b") is replacement


class TestBulkTransformations:
    def test_add_prefix(self) -> None:
        routes = RouteCollection()
        routes.add("users", Route("/users"))
        routes.add_prefix("/admin")
        route = routes.get("users")
        assert route.path == "/admin/users"
        assert isinstance(route.match("/admin/users"), dict)
        assert route.match("/users") is Mismatch.PATH

    def test_add_prefix_strips_trailing_slash(self) -> None:
        routes = _collection("users")
        routes.add_prefix("/admin/")
        assert routes.get("users").path == "/admin/users"

    def test_add_empty_prefix(self) -> None:
        routes = _collection("users")
        routes.add_prefix("/")
        assert routes.get("users").path == "/users"

    def test_add_name_prefix(self) -> None:
        routes = _collection("list", "show")
        routes.add_name_prefix("admin_")
        assert routes.names() == ["admin_list", "admin_show"]
        assert not routes.has("list")
        assert routes.get("admin_show").path == "/show"

    def test_add_defaults_fills_gaps(self) -> None:
        routes = RouteCollection()
        routes.add("fr", Route("/fr", {"_locale": "fr"}))
        routes.add("plain", Route("/plain"))
        routes.add_defaults({"_locale": "en", "_format": "html"})
        assert routes.get("fr").defaults == {"_locale": "fr", "_format": "html"}
        assert routes.get("plain").defaults == {"_locale": "en", "_format": "html"}

    def test_add_defaults_recompiles(self) -> None:
        routes = RouteCollection()
        routes.add("blog", Route("/blog/{page}"))
        routes.add_defaults({"page": 1})
        assert routes.get("blog").match("/blog") == {"page": 1}

    def test_add_requirements_fills_gaps(self) -> None:
        routes = RouteCollection()
        routes.add("strict", Route("/a/{id}", requirements={"id": r"[a-f]+"}))
        routes.add("loose", Route("/b/{id}"))
        routes.add_requirements({"id": r"\d+"})
        assert routes.get("strict").get_requirement("id") == r"[a-f]+"
        assert routes.get("loose").get_requirement("id") == r"\d+"
        assert routes.get("loose").match("/b/abc") is Mismatch.PATH

    def test_set_methods(self) -> None:
        routes = RouteCollection()
        routes.add("a", Route("/a", methods=["GET"]))
        routes.add("b", Route("/b"))
        routes.set_methods(["post", "PUT"])
        for _, route in routes.items():
            assert route.methods == frozenset({"POST", "PUT"})


class TestDeclarativeForm:
    def test_from_dict(self) -> None:
        routes = RouteCollection.from_dict({
            "home": {"path": "/", "defaults": {"_controller": "home.index"}},
            "article_show": {
                "path": "/article/{id}",
                "requirements": {"id": r"\d+"},
                "methods": ["GET"],
            },
        })
        assert routes.names() == ["home", "article_show"]
        assert routes.get("home").defaults == {"_controller": "home.index"}
        assert routes.get("article_show").methods == frozenset({"GET"})
        assert routes.get("article_show").get_requirement("id") == r"\d+"

    def test_from_dict_missing_path(self) -> None:
        with pytest.raises(RouteConfigError) as exc_info:
            RouteCollection.from_dict({"broken": {"defaults": {}}})
        assert "'broken'" in str(exc_info.value)
        assert "'path'" in str(exc_info.value)

    def test_from_dict_rejects_non_mapping(self) -> None:
        with pytest.raises(RouteConfigError):
            RouteCollection.from_dict([("home", {"path": "/"})])  # type: ignore[arg-type]

    def test_to_dict(self) -> None:
        routes = RouteCollection()
        routes.add("article", Route("/article/{id}", {"_c": "x"}, {"id": r"\d+"}, ["GET"]))
        assert routes.to_dict() == {
            "article": {
                "path": "/article/{id}",
                "defaults": {"_c": "x"},
                "requirements": {"id": r"\d+"},
                "methods": ["GET"],
            }
        }

    def test_round_trip(self) -> None:
        config = {
            "home": {"path": "/", "defaults": {}, "requirements": {}, "methods": []},
            "blog": {
                "path": "/blog/{page}",
                "defaults": {"page": 1},
                "requirements": {"page": r"\d+"},
                "methods": ["GET", "HEAD"],
            },
        }
        assert RouteCollection.from_dict(config).to_dict() == config


class TestRouteConfig:
    def test_only_path_required(self) -> None:
        cfg = RouteConfig.from_mapping("home", {"path": "/"})
        assert cfg == RouteConfig(path="/")

    def test_method_string(self) -> None:
        cfg = RouteConfig.from_mapping("home", {"path": "/", "methods": "GET"})
        assert cfg.methods == ("GET",)

    def test_none_fields_are_empty(self) -> None:
        cfg = RouteConfig.from_mapping("home", {"path": "/", "defaults": None})
        assert cfg.defaults == {}

    def test_entry_must_be_mapping(self) -> None:
        with pytest.raises(RouteConfigError, match="must be a mapping"):
            RouteConfig.from_mapping("home", "/")

    def test_path_must_be_string(self) -> None:
        with pytest.raises(RouteConfigError, match="'path' must be a string"):
            RouteConfig.from_mapping("home", {"path": 42})

    def test_unknown_key(self) -> None:
        with pytest.raises(RouteConfigError, match="unknown keys: controller"):
            RouteConfig.from_mapping("home", {"path": "/", "controller": "x"})

    def test_requirements_must_be_strings(self) -> None:
        with pytest.raises(RouteConfigError, match="requirements"):
            RouteConfig.from_mapping("a", {"path": "/{id}", "requirements": {"id": 5}})

    def test_methods_must_be_strings(self) -> None:
        with pytest.raises(RouteConfigError, match="methods"):
            RouteConfig.from_mapping("a", {"path": "/", "methods": [1, 2]})

    def test_build(self) -> None:
        route = RouteConfig(path="/a/{id}", requirements={"id": r"\d+"}, methods=("get",)).build()
        assert route.path == "/a/{id}"
        assert route.methods == frozenset({"GET"})
