"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from waypoint.routing.params import RouteParams


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``      (is_param=False)
    Param:   ``/:id``        (is_param=True, param_name="id")
    Typed:   ``/:id:int``    (is_param=True, param_name="id", param_type="int")
    Glob:    ``/*path``      (is_param=True, param_name="path", param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"

    @classmethod
    def literal(cls, value: str) -> "PathSegment":
        return cls(value=value)

    @classmethod
    def param(cls, name: str, param_type: str = "str") -> "PathSegment":
        return cls(value=f":{name}", is_param=True, param_name=name, param_type=param_type)

    @property
    def pattern(self) -> str:
        """Segment text including the converter type, as the router parses it."""
        if not self.is_param:
            return self.value
        if self.param_type == "path":
            return f"*{self.param_name}"
        if self.param_type == "str":
            return f":{self.param_name}"
        return f":{self.param_name}:{self.param_type}"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created while declaring actions, compiled into the router at freeze time.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: RouteParams
