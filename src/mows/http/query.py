"""Immutable query string parameters with typed accessors.

Each typed accessor comes in two forms: a strict one that raises
``QueryParamError`` when a present value does not parse, and a ``default_``
one that falls back to the caller's default on a missing, empty, or
unparsable value.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs

from mows.errors import QueryParamError

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """Parse the boolean spellings accepted in query strings.

    Raises ``ValueError`` for anything else.
    """
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    msg = f"invalid boolean {value!r}"
    raise ValueError(msg)


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]
    _raw: bytes

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> bytes:
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    # -- Strings --

    def value(self, key: str) -> str:
        """Return the first value for *key*, or ``""`` if missing."""
        return self.get(key) or ""

    def default_value(self, key: str, default: str) -> str:
        """Return the value for *key*, or *default* if missing or empty."""
        return self.value(key) or default

    # -- Integers --

    def int_value(self, key: str) -> int:
        """Return the value as int; ``0`` if missing.

        Raises ``QueryParamError`` if the value is present but not an integer.
        """
        raw = self.value(key)
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError:
            raise QueryParamError(key, raw, "integer") from None

    def default_int(self, key: str, default: int) -> int:
        """Return the value as int, or *default* if missing or not numeric."""
        try:
            raw = self.value(key)
            return int(raw) if raw else default
        except ValueError:
            return default

    # -- Booleans --

    def bool_value(self, key: str) -> bool:
        """Return the value as bool; ``False`` if missing.

        Raises ``QueryParamError`` if the value is not a recognised spelling.
        """
        raw = self.value(key)
        if not raw:
            return False
        try:
            return parse_bool(raw)
        except ValueError:
            raise QueryParamError(key, raw, "boolean") from None

    def default_bool(self, key: str, default: bool) -> bool:
        """Return the value as bool, or *default* if missing or unrecognised."""
        raw = self.value(key)
        if not raw:
            return default
        try:
            return parse_bool(raw)
        except ValueError:
            return default
