"""Case-insensitive HTTP headers.

``Headers`` is the immutable request side: it stores raw byte pairs from the
ASGI scope and decodes on access. ``ResponseHeaders`` is the mutable
response side owned by a ``ResponseWriter`` until the status line is sent.
"""

from collections.abc import Iterator, Mapping, MutableMapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]


class ResponseHeaders(MutableMapping[str, str]):
    """Mutable, case-insensitive response headers.

    Setting a header replaces every previous value for that name;
    ``add`` appends another value (e.g. a second ``Set-Cookie``).
    Names are stored lower-cased, which is what ASGI expects on the wire.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._items:
            if name == key_lower:
                return value
        raise KeyError(key)

    def __setitem__(self, key: str, value: str) -> None:
        key_lower = key.lower()
        self._items = [(name, v) for name, v in self._items if name != key_lower]
        self._items.append((key_lower, value))

    def __delitem__(self, key: str) -> None:
        key_lower = key.lower()
        if key_lower not in self:
            raise KeyError(key)
        self._items = [(name, v) for name, v in self._items if name != key_lower]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name == key_lower for name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._items:
            if name not in seen:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        return f"ResponseHeaders({self._items!r})"

    def add(self, key: str, value: str) -> None:
        """Append a value without replacing existing ones."""
        self._items.append((key.lower(), value))

    def raw(self) -> list[tuple[bytes, bytes]]:
        """Encode as ASGI header byte pairs."""
        return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in self._items]
