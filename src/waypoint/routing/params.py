"""Path parameter parsing, type conversion, and the RouteParams mapping.

Built-in converters for route path segments like ``:id:int``. Handlers
read captured values through :class:`RouteParams` instead of generated
per-parameter accessors.
"""

from collections.abc import Iterator, Mapping

from waypoint.errors import InvalidRouteParam, MissingRouteParam

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


class RouteParams(Mapping[str, str]):
    """Immutable mapping of captured path parameters.

    Values are the raw strings from the request path. Use the typed
    accessors to convert::

        params.get_int("id")       # 42
        params.typed("id")         # converted with the declared type
        params["slug"]             # raw string
    """

    __slots__ = ("_types", "_values")

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        types: Mapping[str, str] | None = None,
    ) -> None:
        self._values: dict[str, str] = dict(values or {})
        self._types: dict[str, str] = dict(types or {})

    def __getitem__(self, name: str) -> str:
        try:
            return self._values[name]
        except KeyError:
            raise MissingRouteParam(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RouteParams):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RouteParams({self._values!r})"

    @property
    def types(self) -> dict[str, str]:
        """Declared converter type per parameter (``"str"`` when undeclared)."""
        return {name: self._types.get(name, "str") for name in self._values}

    def _convert(self, name: str, param_type: str) -> str | int | float:
        value = self[name]
        try:
            return convert_param(value, param_type)
        except ValueError:
            raise InvalidRouteParam(name, value, param_type) from None

    def get_str(self, name: str) -> str:
        return self[name]

    def get_int(self, name: str) -> int:
        return int(self._convert(name, "int"))

    def get_float(self, name: str) -> float:
        return float(self._convert(name, "float"))

    def typed(self, name: str) -> str | int | float:
        """Return *name* converted with its declared type."""
        return self._convert(name, self._types.get(name, "str"))

    def as_typed_dict(self) -> dict[str, str | int | float]:
        """All parameters converted with their declared types."""
        return {name: self.typed(name) for name in self._values}
