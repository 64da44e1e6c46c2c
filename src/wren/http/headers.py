"""Request headers.

The pipeline only looks up a handful of them (``Host``, ``Origin``, the
CORS request headers), so the ASGI byte pairs are decoded once into a
dict keyed by lowercase name.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive request headers.

    A header sent more than once reads as one comma-joined value, the
    list form HTTP allows for repeated fields.
    """

    __slots__ = ("_fields",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        fields: dict[str, str] = {}
        for raw_name, raw_value in raw:
            name = raw_name.decode("latin-1").lower()
            value = raw_value.decode("latin-1")
            fields[name] = f"{fields[name]}, {value}" if name in fields else value
        self._fields = fields

    def __getitem__(self, key: str) -> str:
        return self._fields[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Headers({self._fields!r})"
