"""Link generation — concrete, method-tagged paths from route templates."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

from waypoint.errors import ConfigurationError, MissingRouteParam

if TYPE_CHECKING:
    from waypoint.actions.derive import RouteDescriptor


@dataclass(frozen=True, slots=True)
class Link:
    """A concrete path tagged with the HTTP method that serves it.

    ``str(link)`` is the href (path plus query string) so a link can be
    dropped straight into a template or redirect.
    """

    method: str
    path: str
    query: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        return self.href

    @property
    def href(self) -> str:
        if not self.query:
            return self.path
        return f"{self.path}?{urlencode(self.query)}"

    def url(self, base_url: str) -> str:
        """Absolute URL for this link under *base_url*."""
        if not base_url:
            msg = "Cannot build an absolute URL without a base_url"
            raise ConfigurationError(msg)
        return base_url.rstrip("/") + self.href


def build_link(
    descriptor: "RouteDescriptor",
    params: Mapping[str, Any],
    *,
    query: Mapping[str, Any] | None = None,
) -> Link:
    """Substitute *params* into a route template.

    Path params are percent-encoded. Entries in *params* that are not
    path params join *query*, after it. ``None`` query values are
    dropped.

    Raises:
        MissingRouteParam: A path param has no value.
    """
    parts: list[str] = []
    used: set[str] = set()
    for seg in descriptor.segments:
        if not seg.is_param:
            parts.append(seg.value)
            continue
        name = seg.param_name or ""
        if params.get(name) is None:
            raise MissingRouteParam(name, descriptor.path)
        used.add(name)
        safe = "/" if seg.param_type == "path" else ""
        parts.append(quote(str(params[name]), safe=safe))

    extra = {k: v for k, v in params.items() if k not in used}
    merged = {**(query or {}), **extra}
    pairs = tuple((k, _query_value(v)) for k, v in merged.items() if v is not None)
    return Link(method=descriptor.method, path="/" + "/".join(parts), query=pairs)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
