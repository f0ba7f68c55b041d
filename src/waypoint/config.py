"""Route derivation configuration.

RouteConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
hashable, no string-key dict lookups.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Route derivation configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouteConfig(
            path_prefix="/api",
            singulars={"people": "person"},
            base_url="https://example.com",
        )

    ``singulars`` may be given as a mapping or as ``(plural, singular)``
    pairs. It is stored as a tuple of pairs so the config stays hashable.
    """

    # Name of the trailing member parameter (Show, Edit, Update, Delete)
    id_param: str = "id"

    # Prepended to every derived path (e.g. "/api")
    path_prefix: str = ""

    # Parent resource singular forms as (snake_case plural, singular) pairs
    singulars: tuple[tuple[str, str], ...] = ()

    # Reject parent segments missing from ``singulars`` instead of guessing
    strict_singulars: bool = False

    # Used by Link.url() when no base is passed
    base_url: str = ""

    def __post_init__(self) -> None:
        pairs: Iterable[tuple[str, str]] = (
            self.singulars.items() if isinstance(self.singulars, Mapping) else self.singulars
        )
        object.__setattr__(self, "singulars", tuple((str(p), str(s)) for p, s in pairs))

    def singular_for(self, plural: str) -> str | None:
        """Return the configured singular for *plural*, or None."""
        for key, singular in self.singulars:
            if key == plural:
                return singular
        return None
