"""Waypoint exception hierarchy.

Shared across the deriver, registry, router, and link builder so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when route declarations or configuration are invalid.

    Typically raised while declaring actions or compiling the registry
    at startup.
    """


class DerivationError(WaypointError):
    """An action identifier could not be turned into a route."""


class MalformedIdentifier(DerivationError):
    """Identifier is missing its resource or action-kind segment."""

    def __init__(self, identifier: object, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Malformed action identifier {identifier!r}: {reason}")


class UnknownActionKind(DerivationError):
    """Trailing segment is not one of the conventional action kinds."""

    def __init__(self, identifier: object, kind: str, known: tuple[str, ...]) -> None:
        self.identifier = identifier
        self.kind = kind
        super().__init__(
            f"Unknown action kind {kind!r} in {identifier!r}. "
            f"Expected one of: {', '.join(known)}"
        )


class RouteParamError(WaypointError):
    """Base for route parameter access and substitution errors."""


class MissingRouteParam(RouteParamError, KeyError):
    """A named path parameter has no value."""

    def __init__(self, name: str, path: str = "") -> None:
        self.name = name
        self.path = path
        super().__init__(name)

    def __str__(self) -> str:
        if self.path:
            return f"Missing route param {self.name!r} for {self.path}"
        return f"Missing route param {self.name!r}"


class InvalidRouteParam(RouteParamError, ValueError):
    """A captured value could not be converted to its declared type."""

    def __init__(self, name: str, value: str, param_type: str) -> None:
        self.name = name
        self.value = value
        self.param_type = param_type
        super().__init__(f"Route param {name!r}={value!r} is not a valid {param_type}")


@dataclass(frozen=True, slots=True)
class HTTPError(WaypointError):
    """An error that maps directly to an HTTP status code.

    Raised by the router when a request cannot be dispatched.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods and embeds
    the allowed methods in the detail string for developer visibility.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
