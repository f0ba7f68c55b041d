"""Tests for waypoint.errors — exception hierarchy and error messages."""

import pytest

from waypoint.errors import (
    ConfigurationError,
    DerivationError,
    HTTPError,
    InvalidRouteParam,
    MalformedIdentifier,
    MethodNotAllowed,
    MissingRouteParam,
    NotFound,
    RouteParamError,
    UnknownActionKind,
    WaypointError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error", "base"),
        [
            (ConfigurationError, WaypointError),
            (DerivationError, WaypointError),
            (MalformedIdentifier, DerivationError),
            (UnknownActionKind, DerivationError),
            (RouteParamError, WaypointError),
            (MissingRouteParam, RouteParamError),
            (MissingRouteParam, KeyError),
            (InvalidRouteParam, RouteParamError),
            (InvalidRouteParam, ValueError),
            (HTTPError, WaypointError),
            (NotFound, HTTPError),
            (MethodNotAllowed, HTTPError),
        ],
    )
    def test_subclass(self, error: type, base: type) -> None:
        assert issubclass(error, base)


class TestDerivationErrors:
    def test_malformed_message(self) -> None:
        err = MalformedIdentifier("Users", "missing action-kind segment")
        assert err.identifier == "Users"
        assert str(err) == "Malformed action identifier 'Users': missing action-kind segment"

    def test_unknown_kind_message(self) -> None:
        err = UnknownActionKind("Users::Archive", "Archive", ("Index", "Show"))
        assert err.kind == "Archive"
        assert str(err) == "Unknown action kind 'Archive' in 'Users::Archive'. Expected one of: Index, Show"


class TestRouteParamErrors:
    def test_missing_without_path(self) -> None:
        assert str(MissingRouteParam("id")) == "Missing route param 'id'"

    def test_missing_with_path(self) -> None:
        assert str(MissingRouteParam("id", "/users/:id")) == "Missing route param 'id' for /users/:id"

    def test_invalid(self) -> None:
        err = InvalidRouteParam("id", "abc", "int")
        assert str(err) == "Route param 'id'='abc' is not a valid int"


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad")) == "400: Bad"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_not_found_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_method_not_allowed(self) -> None:
        err = MethodNotAllowed(frozenset({"PUT", "GET"}))
        assert err.status == 405
        assert err.headers == (("Allow", "GET, PUT"),)
        assert "GET, PUT" in err.detail
