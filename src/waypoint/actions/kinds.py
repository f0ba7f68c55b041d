"""Conventional action kinds and their HTTP shape.

Each kind fixes the HTTP method and how the path ends: bare collection
path, trailing member parameter, or a literal suffix.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class KindShape:
    """HTTP method and path tail for one action kind.

    Attributes:
        method: Uppercase HTTP method.
        member: True when the path ends with the member ``:id`` param.
        suffix: Literal segment appended after the member param, if any.
    """

    method: str
    member: bool = False
    suffix: str | None = None


class ActionKind(Enum):
    """The seven conventional action kinds."""

    INDEX = "Index"
    SHOW = "Show"
    NEW = "New"
    CREATE = "Create"
    EDIT = "Edit"
    UPDATE = "Update"
    DELETE = "Delete"

    @property
    def shape(self) -> KindShape:
        return _SHAPES[self]

    @property
    def method(self) -> str:
        return _SHAPES[self].method

    @classmethod
    def lookup(cls, segment: str) -> "ActionKind | None":
        """Return the kind named by *segment*, or None.

        Matching ignores case only, so ``Show``, ``show`` and ``SHOW``
        all resolve to :attr:`SHOW` while ``Sh_ow`` resolves to nothing.
        """
        return _BY_KEY.get(segment.lower())


_SHAPES: dict[ActionKind, KindShape] = {
    ActionKind.INDEX: KindShape("GET"),
    ActionKind.SHOW: KindShape("GET", member=True),
    ActionKind.NEW: KindShape("GET", suffix="new"),
    ActionKind.CREATE: KindShape("POST"),
    ActionKind.EDIT: KindShape("GET", member=True, suffix="edit"),
    ActionKind.UPDATE: KindShape("PUT", member=True),
    ActionKind.DELETE: KindShape("DELETE", member=True),
}

_BY_KEY: dict[str, ActionKind] = {kind.value.lower(): kind for kind in ActionKind}

KIND_NAMES: tuple[str, ...] = tuple(kind.value for kind in ActionKind)
