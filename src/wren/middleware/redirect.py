"""Redirect plain HTTP requests to the HTTPS listener."""

from wren.http.request import Request
from wren.http.response import Response, redirect
from wren.middleware.protocol import Next


class HTTPSRedirect:
    """Answer every non-TLS request with a 301 to its ``https://`` URL.

    The HTTP port in the ``Host`` header is swapped for the HTTPS port,
    so ``example.com:8080/task`` becomes ``https://example.com:8443/task``.
    Hosts without an explicit port keep the default HTTPS port.
    """

    __slots__ = ("_http_port", "_https_port")

    def __init__(self, http_port: int, https_port: int) -> None:
        self._http_port = http_port
        self._https_port = https_port

    def target(self, request: Request) -> str:
        host = request.host
        name, sep, port = host.rpartition(":")
        if sep and port == str(self._http_port):
            host = f"{name}:{self._https_port}"
        return f"https://{host}{request.url}"

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.is_secure:
            return await next(request)
        return redirect(self.target(request), status=301)
