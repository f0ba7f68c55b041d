"""Compiled router with trie-based path matching.

Routes are registered while actions are declared and compiled into an
immutable lookup structure when the registry freezes.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import unquote

from waypoint.errors import ConfigurationError, MethodNotAllowed, NotFound
from waypoint.routing.params import CONVERTERS, RouteParams
from waypoint.routing.route import PathSegment, Route, RouteMatch

logger = logging.getLogger("waypoint.routing")

# :name or :name:type
_COLON_PARAM_RE = re.compile(r"^:(\w+)(?::(\w+))?$")
# {name} or {name:type}
_BRACE_PARAM_RE = re.compile(r"^\{(\w+)(?::(\w+))?\}$")
# *name
_GLOB_PARAM_RE = re.compile(r"^\*(\w+)$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"           -> [PathSegment("users")]
        "/users/:id"       -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/users/:id:int"   -> [..., PathSegment(":id:int", is_param=True, param_type="int")]
        "/users/{id:int}"  -> same as above
        "/files/*filepath" -> [..., PathSegment("*filepath", is_param=True, param_type="path")]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> placeholders. "
                "Use :param (or {param}) instead, e.g. /users/:id"
            )
            raise ConfigurationError(msg)

        match = _COLON_PARAM_RE.match(part) or _BRACE_PARAM_RE.match(part)
        if match:
            param_name, param_type = match.group(1), match.group(2) or "str"
        elif glob := _GLOB_PARAM_RE.match(part):
            param_name, param_type = glob.group(1), "path"
        else:
            segments.append(PathSegment(value=part))
            continue

        if param_type not in CONVERTERS:
            msg = (
                f"Unknown param type {param_type!r} in route path {path!r}. "
                f"Expected one of: {', '.join(CONVERTERS)}"
            )
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(
                value=part,
                is_param=True,
                param_name=param_name,
                param_type=param_type,
            )
        )
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("catch_all_route", "children", "param_children", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Parameter children, tried in registration order
        self.param_children: list[_ParamEdge] = []
        # Catch-all route (path converter)
        self.catch_all_route: _CatchAllEdge | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all (path) edge — consumes remaining path."""

    param_name: str
    route_by_method: dict[str, Route]


# (param_name, raw_value, param_type) captured along a match
_Captured = tuple[tuple[str, str, str], ...]


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/users", handler, frozenset({"GET"})))
        router.add(Route("/users/:id:int", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)

        segments = parse_path(route.path)
        node = self._root

        for seg in segments:
            if seg.is_param and seg.param_type == "path":
                # Catch-all: consumes rest of path, must be last segment
                if node.catch_all_route is None:
                    node.catch_all_route = _CatchAllEdge(
                        param_name=seg.param_name or "path",
                        route_by_method={},
                    )
                self._register(node.catch_all_route.route_by_method, route)
                return

            if seg.is_param:
                node = self._param_child(node, seg).node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        self._register(node.routes_by_method, route)

    @staticmethod
    def _param_child(node: _TrieNode, seg: PathSegment) -> _ParamEdge:
        name = seg.param_name or ""
        for edge in node.param_children:
            if edge.param_name == name and edge.param_type == seg.param_type:
                return edge
        pattern, _ = CONVERTERS[seg.param_type]
        edge = _ParamEdge(
            param_name=name,
            param_type=seg.param_type,
            regex=re.compile(f"^{pattern}$"),
            node=_TrieNode(),
        )
        node.param_children.append(edge)
        return edge

    @staticmethod
    def _register(routes_by_method: dict[str, Route], route: Route) -> None:
        for method in route.methods:
            existing = routes_by_method.get(method)
            if existing is not None and existing is not route:
                msg = (
                    f"Route conflict: {method} {route.path} is already "
                    f"registered as {existing.path}"
                    + (f" ({existing.name})" if existing.name else "")
                )
                raise ConfigurationError(msg)
            routes_by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes.

        Traverses the trie to collect every unique Route object.
        Useful for introspection and the ``waypoint routes`` listing.
        """
        seen: set[int] = set()
        result: list[Route] = []
        self._collect_routes(self._root, seen, result)
        return result

    def _collect_routes(
        self,
        node: _TrieNode,
        seen: set[int],
        result: list[Route],
    ) -> None:
        """Recursively collect routes from the trie."""
        for route in node.routes_by_method.values():
            if id(route) not in seen:
                seen.add(id(route))
                result.append(route)

        for child in node.children.values():
            self._collect_routes(child, seen, result)

        for edge in node.param_children:
            self._collect_routes(edge.node, seen, result)

        if node.catch_all_route is not None:
            for route in node.catch_all_route.route_by_method.values():
                if id(route) not in seen:
                    seen.add(id(route))
                    result.append(route)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True
        logger.debug("Router compiled with %d routes", len(self.routes))

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.

        The path is split on raw slashes first, so an encoded ``%2F`` stays
        inside one segment. Captured values are percent-decoded.
        """
        method = method.upper()
        parts = [p for p in path.strip("/").split("/") if p]

        allowed: set[str] = set()
        for routes_by_method, captured in self._match_node(self._root, parts, 0, ()):
            if method in routes_by_method:
                params = RouteParams(
                    {name: unquote(value) for name, value, _ in captured},
                    {name: param_type for name, _, param_type in captured},
                )
                return RouteMatch(route=routes_by_method[method], path_params=params)
            allowed.update(routes_by_method)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        captured: _Captured,
    ) -> Iterator[tuple[dict[str, Route], _Captured]]:
        """Yield every (routes_by_method, captured) reachable for *parts*.

        Static children are tried before parameter children, and those
        before the catch-all.
        """
        # All parts consumed: this node is a candidate
        if index == len(parts):
            if node.routes_by_method:
                yield node.routes_by_method, captured
            return

        part = parts[index]

        # 1. Static child (exact match)
        if part in node.children:
            yield from self._match_node(node.children[part], parts, index + 1, captured)

        # 2. Parameter children
        for edge in node.param_children:
            if edge.regex.match(part):
                yield from self._match_node(
                    edge.node,
                    parts,
                    index + 1,
                    (*captured, (edge.param_name, part, edge.param_type)),
                )

        # 3. Catch-all
        if node.catch_all_route is not None:
            edge = node.catch_all_route
            remaining = "/".join(parts[index:])
            yield edge.route_by_method, (*captured, (edge.param_name, remaining, "path"))
