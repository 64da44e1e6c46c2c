"""Query string of a request.

Read the same way the client router reads ``location.search``: blank
values are kept and a repeated key resolves to its last occurrence.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl

from wren.routing.urls import parse_queries


class QueryParams(Mapping[str, str]):
    """Immutable view over a raw query string.

    Indexing gives the last value sent for a key; ``get_list`` gives
    every value in order.
    """

    __slots__ = ("_params", "raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        self.raw = query_string
        self._params = parse_queries(query_string)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"QueryParams({self._params!r})"

    def get_list(self, key: str) -> list[str]:
        return [value for name, value in parse_qsl(self.raw, keep_blank_values=True) if name == key]
