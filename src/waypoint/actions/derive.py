"""Convention-based route derivation.

Turns an action identifier into an HTTP method and a path template::

    Users::Show                      -> GET    /users/:id
    Users::Create                    -> POST   /users
    Admin::Users::Edit               -> GET    /admin/users/:id/edit
    Projects::Users::Index (nested)  -> GET    /projects/:project_id/users

Derivation is pure: the same identifier, nesting depth, and config
always produce an equal descriptor. All validation happens here, so a
bad identifier fails when the action is declared, never per request.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

from waypoint.actions.identifier import ActionIdentifier, singularize, snake_case
from waypoint.actions.kinds import KIND_NAMES, ActionKind
from waypoint.config import RouteConfig
from waypoint.errors import ConfigurationError, MalformedIdentifier, UnknownActionKind
from waypoint.routing.params import CONVERTERS
from waypoint.routing.route import PathSegment

_DEFAULT_CONFIG = RouteConfig()


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """HTTP method plus path template for one action. Immutable.

    Attributes:
        method: Uppercase HTTP method.
        segments: Literal and parameter segments, root first.
        identifier: The identifier this route was derived from.
        kind: The identifier's action kind.
    """

    method: str
    segments: tuple[PathSegment, ...]
    identifier: ActionIdentifier
    kind: ActionKind

    def __str__(self) -> str:
        return f"{self.method} {self.path}"

    @property
    def path(self) -> str:
        """Path template with ``:name`` placeholders (``/users/:id``)."""
        return "/" + "/".join(
            f":{s.param_name}" if s.is_param else s.value for s in self.segments
        )

    @property
    def pattern(self) -> str:
        """Path template including converter types (``/users/:id:int``)."""
        return "/" + "/".join(s.pattern for s in self.segments)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.is_param and s.param_name)

    @property
    def param_types(self) -> dict[str, str]:
        return {s.param_name: s.param_type for s in self.segments if s.is_param and s.param_name}

    def with_param_types(self, types: Mapping[str, str]) -> "RouteDescriptor":
        """Return a copy whose named params use the given converter types.

        Raises:
            ConfigurationError: If a name is not a param of this route, or
                a type is not a registered converter.
        """
        names = set(self.param_names)
        for name, param_type in types.items():
            if name not in names:
                msg = (
                    f"{self.identifier} has no route param {name!r}. "
                    f"Params: {', '.join(self.param_names) or '(none)'}"
                )
                raise ConfigurationError(msg)
            if param_type not in CONVERTERS or param_type == "path":
                msg = f"Unsupported type {param_type!r} for route param {name!r} of {self.identifier}"
                raise ConfigurationError(msg)

        segments = tuple(
            PathSegment.param(s.param_name, types[s.param_name])
            if s.is_param and s.param_name in types
            else s
            for s in self.segments
        )
        return replace(self, segments=segments)


def derive(
    identifier: ActionIdentifier | str | Iterable[str],
    nested: bool | int = False,
    *,
    config: RouteConfig | None = None,
) -> RouteDescriptor:
    """Derive the route for an action identifier.

    Args:
        identifier: ``ActionIdentifier``, a name like ``"Users::Show"``,
            or a sequence of segments.
        nested: Number of parent resources before the resource segment.
            ``True`` means one parent, ``False`` means none.
        config: Derivation settings. Defaults to ``RouteConfig()``.

    Raises:
        MalformedIdentifier: Missing resource or action-kind segment, or
            a nesting depth that leaves no resource segment.
        UnknownActionKind: The last segment is not a conventional kind.
    """
    config = config or _DEFAULT_CONFIG
    ident = ActionIdentifier.parse(identifier)
    segments = ident.segments

    if len(segments) < 2:
        if ActionKind.lookup(segments[-1]) is not None:
            raise MalformedIdentifier(str(ident), "missing resource segment")
        raise MalformedIdentifier(str(ident), "missing action-kind segment")

    kind = ActionKind.lookup(segments[-1])
    if kind is None:
        raise UnknownActionKind(str(ident), segments[-1], KIND_NAMES)

    depth = int(nested)
    if depth < 0:
        raise MalformedIdentifier(str(ident), f"nesting depth must be >= 0, got {depth}")

    chain = segments[:-1]
    if depth > len(chain) - 1:
        raise MalformedIdentifier(
            str(ident),
            f"nesting depth {depth} leaves no resource segment",
        )
    split = len(chain) - 1 - depth
    namespace, parents, resource = chain[:split], chain[split:-1], chain[-1]

    path: list[PathSegment] = [
        PathSegment.literal(part) for part in config.path_prefix.split("/") if part
    ]
    path.extend(PathSegment.literal(_literal(ident, s)) for s in namespace)
    for parent in parents:
        plural = _literal(ident, parent)
        path.append(PathSegment.literal(plural))
        path.append(PathSegment.param(f"{_singular(ident, plural, config)}_id"))
    path.append(PathSegment.literal(_literal(ident, resource)))

    shape = kind.shape
    if shape.member:
        path.append(PathSegment.param(config.id_param))
    if shape.suffix:
        path.append(PathSegment.literal(shape.suffix))

    return RouteDescriptor(
        method=shape.method,
        segments=tuple(path),
        identifier=ident,
        kind=kind,
    )


def _literal(ident: ActionIdentifier, segment: str) -> str:
    literal = snake_case(segment)
    if not literal:
        raise MalformedIdentifier(str(ident), f"segment {segment!r} has no path-safe characters")
    return literal


def _singular(ident: ActionIdentifier, plural: str, config: RouteConfig) -> str:
    singular = config.singular_for(plural)
    if singular is not None:
        value = snake_case(singular)
        if not value:
            raise MalformedIdentifier(
                str(ident),
                f"configured singular {singular!r} for {plural!r} has no path-safe characters",
            )
        return value
    if config.strict_singulars:
        raise MalformedIdentifier(
            str(ident),
            f"no singular configured for parent resource {plural!r}",
        )
    return singularize(plural)
