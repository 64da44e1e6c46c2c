"""Immutable HTTP request.

Wren only serves files, so a request is its metadata: the body is never
read and methods other than GET and HEAD end at the fallback's 405.
"""

from __future__ import annotations

from dataclasses import dataclass

from wren._internal.asgi import Scope
from wren.http.headers import Headers
from wren.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """What the pipeline knows about an incoming request."""

    method: str
    path: str
    scheme: str
    headers: Headers
    query: QueryParams
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    @property
    def url(self) -> str:
        """Request target: path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    @property
    def host(self) -> str:
        """The ``Host`` header, falling back to the server address."""
        if host := self.headers.get("host"):
            return host
        if self.server is None:
            return ""
        name, port = self.server
        return f"{name}:{port}"

    @property
    def is_secure(self) -> bool:
        return self.scheme == "https"

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            scheme=scope.get("scheme", "http"),
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
