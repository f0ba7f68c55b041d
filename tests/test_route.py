"""Tests for waypoint.routing.route — Route, RouteMatch, PathSegment."""

import pytest

from waypoint.routing.params import RouteParams
from waypoint.routing.route import PathSegment, Route, RouteMatch


def _handler() -> str:
    return "ok"


class TestPathSegment:
    def test_static(self) -> None:
        seg = PathSegment(value="users")
        assert seg.is_param is False
        assert seg.param_name is None
        assert seg.param_type == "str"
        assert seg.pattern == "users"

    def test_param_constructor(self) -> None:
        seg = PathSegment.param("id")
        assert seg == PathSegment(value=":id", is_param=True, param_name="id")
        assert seg.pattern == ":id"

    def test_typed_pattern(self) -> None:
        assert PathSegment.param("id", "int").pattern == ":id:int"

    def test_glob_pattern(self) -> None:
        assert PathSegment.param("rest", "path").pattern == "*rest"

    def test_frozen(self) -> None:
        seg = PathSegment(value="users")
        with pytest.raises(AttributeError):
            seg.value = "other"  # type: ignore[misc]


class TestRoute:
    def test_creation(self) -> None:
        route = Route(path="/users", handler=_handler, methods=frozenset({"GET"}))
        assert route.handler is _handler
        assert route.name is None

    def test_frozen(self) -> None:
        route = Route(path="/", handler=_handler, methods=frozenset({"GET"}))
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]


class TestRouteMatch:
    def test_creation(self) -> None:
        route = Route(path="/users/:id", handler=_handler, methods=frozenset({"GET"}))
        match = RouteMatch(route=route, path_params=RouteParams({"id": "42"}))
        assert match.route is route
        assert match.path_params["id"] == "42"
