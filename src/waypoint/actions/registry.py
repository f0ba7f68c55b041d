"""Action registry — declare actions once, derive their routes up front.

Declarations derive routes immediately so bad identifiers, unknown
kinds, and conflicting routes fail at import time. Compiling the
registry freezes it into a :class:`~waypoint.routing.router.Router`.

Usage::

    actions = ActionRegistry()

    @actions.action("Users::Show", params={"id": "int"})
    def show_user(params):
        return f"user {params.get_int('id')}"

    actions.match("GET", "/users/42").route.handler
    actions.path_for("Users::Show", id=42)  # "/users/42"
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from waypoint.actions.derive import RouteDescriptor, derive
from waypoint.actions.identifier import ActionIdentifier
from waypoint.config import RouteConfig
from waypoint.errors import ConfigurationError, WaypointError
from waypoint.routing.links import Link, build_link
from waypoint.routing.route import Route, RouteMatch
from waypoint.routing.router import Router

logger = logging.getLogger("waypoint.actions")

_H = TypeVar("_H", bound=Callable[..., Any])

IdentifierLike = ActionIdentifier | str | Iterable[str]


@dataclass(frozen=True, slots=True)
class Action:
    """A declared action: its route and the handler that serves it."""

    descriptor: RouteDescriptor
    handler: Callable[..., Any]
    name: str

    @property
    def identifier(self) -> ActionIdentifier:
        return self.descriptor.identifier

    @property
    def method(self) -> str:
        return self.descriptor.method

    @property
    def path(self) -> str:
        return self.descriptor.path

    def to_route(self) -> Route:
        return Route(
            path=self.descriptor.pattern,
            handler=self.handler,
            methods=frozenset({self.descriptor.method}),
            name=self.name,
        )


class ActionRegistry:
    """Collects action declarations and compiles them into a router."""

    __slots__ = ("_actions", "_config", "_router", "_routes")

    def __init__(self, config: RouteConfig | None = None) -> None:
        self._config = config or RouteConfig()
        self._actions: dict[tuple[str, ...], Action] = {}
        self._routes: dict[tuple[str, str], Action] = {}
        self._router: Router | None = None

    @property
    def config(self) -> RouteConfig:
        return self._config

    @property
    def frozen(self) -> bool:
        return self._router is not None

    # -- Declaration ------------------------------------------------------

    def declare(
        self,
        identifier: IdentifierLike,
        handler: Callable[..., Any],
        *,
        nested: bool | int = False,
        params: Mapping[str, str] | None = None,
        name: str | None = None,
    ) -> Action:
        """Declare an action and derive its route now.

        Args:
            identifier: Action identifier (``"Users::Show"``).
            handler: Callable that serves the route.
            nested: Number of parent resources (``True`` for one).
            params: Converter type per route param (``{"id": "int"}``).
            name: Route name. Defaults to the snake_cased identifier.

        Raises:
            MalformedIdentifier: See :func:`~waypoint.actions.derive.derive`.
            UnknownActionKind: See :func:`~waypoint.actions.derive.derive`.
            ConfigurationError: Registry is compiled, the identifier or
                route is already declared, or *params* names an unknown param.
        """
        if self.frozen:
            msg = f"Cannot declare {identifier!r} after the registry is compiled."
            raise ConfigurationError(msg)

        descriptor = derive(identifier, nested, config=self._config)
        if params:
            descriptor = descriptor.with_param_types(params)
        ident = descriptor.identifier

        if ident.key in self._actions:
            msg = f"Action {ident} is already declared."
            raise ConfigurationError(msg)

        route_key = (descriptor.method, descriptor.path)
        existing = self._routes.get(route_key)
        if existing is not None:
            msg = f"{descriptor} for {ident} is already served by {existing.identifier}."
            raise ConfigurationError(msg)

        action = Action(descriptor=descriptor, handler=handler, name=name or ident.name)
        self._actions[ident.key] = action
        self._routes[route_key] = action
        logger.debug("Declared %s -> %s", descriptor, ident)
        return action

    def action(
        self,
        identifier: IdentifierLike | None = None,
        *,
        nested: bool | int = False,
        params: Mapping[str, str] | None = None,
        name: str | None = None,
    ) -> Callable[[_H], _H]:
        """Decorator form of :meth:`declare`.

        Without an identifier, the decorated object's ``__qualname__``
        supplies one, so nested classes ``Users.Show`` declare
        ``Users::Show``.
        """

        def decorator(handler: _H) -> _H:
            ident = identifier if identifier is not None else ActionIdentifier.from_object(handler)
            self.declare(ident, handler, nested=nested, params=params, name=name)
            return handler

        return decorator

    # -- Lookup -----------------------------------------------------------

    def get(self, identifier: IdentifierLike) -> Action:
        """Return the declared action for *identifier*.

        Raises:
            KeyError: If no such action is declared.
        """
        ident = ActionIdentifier.parse(identifier)
        try:
            return self._actions[ident.key]
        except KeyError:
            raise KeyError(f"No action declared for {ident}") from None

    def __contains__(self, identifier: object) -> bool:
        try:
            ident = ActionIdentifier.parse(identifier)  # type: ignore[arg-type]
        except (TypeError, WaypointError):
            return False
        return ident.key in self._actions

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    # -- Dispatch ---------------------------------------------------------

    def compile(self) -> Router:
        """Freeze the registry and return its compiled router.

        Idempotent: later calls return the same router.
        """
        if self._router is None:
            router = Router()
            for action in self._actions.values():
                router.add(action.to_route())
            router.compile()
            self._router = router
            logger.debug("Compiled %d actions", len(self._actions))
        return self._router

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request against declared actions, compiling on first use.

        Raises:
            NotFound: No action serves the path.
            MethodNotAllowed: The path is served, but not for *method*.
        """
        return self.compile().match(method, path)

    # -- Links ------------------------------------------------------------

    def link(
        self,
        identifier: IdentifierLike,
        /,
        **params: Any,
    ) -> Link:
        """Build a method-tagged link to a declared action.

        Keyword params that are not path params become query-string
        entries, so ``link("Search::Index", query="foo")`` gives
        ``/search?query=foo``.

        Raises:
            KeyError: If no such action is declared.
            MissingRouteParam: A path param has no value.
        """
        return build_link(self.get(identifier).descriptor, params)

    def path_for(self, identifier: IdentifierLike, /, **params: Any) -> str:
        return self.link(identifier, **params).href

    def url_for(self, identifier: IdentifierLike, /, **params: Any) -> str:
        """Absolute URL for an action, under ``config.base_url``."""
        return self.link(identifier, **params).url(self._config.base_url)
