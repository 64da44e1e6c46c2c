"""CORS for the public directory.

Bundles, fonts, and JSON fixtures of an SPA are sometimes read from
other origins. Wren only serves reads, so the policy is small: an
origin allow-list, a fixed set of methods, and optional credentials.
Wired in by ``AppConfig.cors_origins``.
"""

from dataclasses import dataclass

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next

READ_METHODS = ("GET", "HEAD", "OPTIONS")


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """Which origins may read the public directory.

    Defaults allow nothing::

        CORSConfig(allow_origins=("https://tasks.example.com",))
    """

    allow_origins: tuple[str, ...] = ()
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # seconds a preflight may be cached

    @property
    def wildcard(self) -> bool:
        """True when ``*`` may be sent as-is (never with credentials)."""
        return "*" in self.allow_origins and not self.allow_credentials


class CORSMiddleware:
    """Answer preflights and tag responses for allowed origins.

    Requests without an ``Origin`` header, or from an origin that is not
    allowed, pass through untouched.
    """

    __slots__ = ("_extra", "_origins", "config")

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()
        self._origins = frozenset(self.config.allow_origins)

        extra: list[tuple[str, str]] = []
        if self.config.allow_credentials:
            extra.append(("Access-Control-Allow-Credentials", "true"))
        if self.config.expose_headers:
            extra.append(("Access-Control-Expose-Headers", ", ".join(self.config.expose_headers)))
        self._extra = tuple(extra)

    def allows(self, origin: str) -> bool:
        return "*" in self._origins or origin in self._origins

    def origin_headers(self, origin: str) -> tuple[tuple[str, str], ...]:
        """Headers added to every response for an allowed *origin*."""
        if self.config.wildcard:
            return (("Access-Control-Allow-Origin", "*"), *self._extra)
        return (("Access-Control-Allow-Origin", origin), ("Vary", "Origin"), *self._extra)

    def preflight(self, request: Request, origin: str) -> Response:
        headers = list(self.origin_headers(origin))
        if request.headers.get("access-control-request-method"):
            headers.append(("Access-Control-Allow-Methods", ", ".join(READ_METHODS)))
        if self.config.allow_headers:
            headers.append(("Access-Control-Allow-Headers", ", ".join(self.config.allow_headers)))
        headers.append(("Access-Control-Max-Age", str(self.config.max_age)))
        return Response(body="", status=204, headers=tuple(headers))

    async def __call__(self, request: Request, next: Next) -> Response:
        origin = request.headers.get("origin")
        if origin is None or not self.allows(origin):
            return await next(request)

        if request.method == "OPTIONS":
            return self.preflight(request, origin)

        response = await next(request)
        for name, value in self.origin_headers(origin):
            response = response.with_header(name, value)
        return response
