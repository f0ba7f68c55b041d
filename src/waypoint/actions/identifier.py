"""Action identifiers and the naming helpers that turn them into paths.

An identifier is the structural name of an action: namespace segments,
the resource, and a trailing action kind (``Admin::Users::Show``).
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from waypoint.errors import MalformedIdentifier

# "::", "." or ":" between segments
_SEPARATOR_RE = re.compile(r"::|[.:]")

# HTMLPage -> HTML_Page, then MyAdmin -> My_Admin
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY_RE = re.compile(r"([a-z\d])([A-Z])")
_NON_IDENT_RE = re.compile(r"[^a-z0-9_]+")


def snake_case(segment: str) -> str:
    """Convert a segment name to lower snake_case.

    Examples::

        "MyAdminSection" -> "my_admin_section"
        "HTMLPages"      -> "html_pages"
        "line-items"     -> "line_items"
        "users"          -> "users"
    """
    value = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", segment)
    value = _WORD_BOUNDARY_RE.sub(r"\1_\2", value)
    value = value.replace("-", "_").lower()
    return _NON_IDENT_RE.sub("_", value).strip("_")


def singularize(name: str) -> str:
    """Convert a plural resource name to singular.

    Suffix heuristic only. Irregular plurals belong in
    ``RouteConfig.singulars``.
    """
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith(("ses", "xes", "ches", "shes")):
        return name[:-2]
    if name.endswith("s") and not name.endswith("ss"):
        return name[:-1]
    return name


@dataclass(frozen=True, slots=True)
class ActionIdentifier:
    """Ordered, immutable segments naming one action.

    The last segment is the action kind. Build one with :meth:`parse`
    or :meth:`from_object` rather than by hand.
    """

    segments: tuple[str, ...]

    def __str__(self) -> str:
        return "::".join(self.segments)

    @property
    def kind_segment(self) -> str:
        return self.segments[-1]

    @property
    def key(self) -> tuple[str, ...]:
        """Spelling-insensitive key: ``Users::Show`` and ``users.show`` share one."""
        return tuple(snake_case(s) for s in self.segments)

    @property
    def name(self) -> str:
        """Default route name: snake_cased segments joined by ``_``."""
        return "_".join(self.key)

    @classmethod
    def parse(cls, value: "str | Iterable[str] | ActionIdentifier") -> "ActionIdentifier":
        """Build an identifier from a name string or a sequence of segments.

        Accepts ``"Users::Show"``, ``"users.show"``, ``"users:show"`` or
        ``["Users", "Show"]``.

        Raises:
            MalformedIdentifier: If the value is empty or has an empty segment.
        """
        if isinstance(value, ActionIdentifier):
            return value
        if isinstance(value, str):
            parts = tuple(p.strip() for p in _SEPARATOR_RE.split(value.strip()))
        else:
            parts = tuple(value)
            if not all(isinstance(p, str) for p in parts):
                raise MalformedIdentifier(value, "segments must be strings")
            parts = tuple(p.strip() for p in parts)

        if not parts or parts == ("",):
            raise MalformedIdentifier(value, "identifier is empty")
        if any(not p for p in parts):
            raise MalformedIdentifier(value, "identifier has an empty segment")
        return cls(parts)

    @classmethod
    def from_object(cls, obj: Any) -> "ActionIdentifier":
        """Derive an identifier from a class or function's ``__qualname__``.

        Nested classes ``class Users: class Show: ...`` give
        ``Users::Show``. Anything up to the last ``<locals>`` marker is
        dropped so actions declared inside functions work too.
        """
        qualname = getattr(obj, "__qualname__", None)
        if not qualname:
            raise MalformedIdentifier(obj, "object has no __qualname__")
        parts = qualname.split(".")
        if "<locals>" in parts:
            last = len(parts) - 1 - parts[::-1].index("<locals>")
            parts = parts[last + 1 :]
        return cls.parse(parts)
