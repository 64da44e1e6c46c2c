"""Static file serving middleware.

Serves files from the public directory for matching URL prefixes.
Directories resolve to their index file. Misses fall through to the
next handler, which for a wren app is the SPA fallback.
"""

import mimetypes
from pathlib import Path

from wren.errors import Forbidden
from wren.http.request import Request
from wren.http.response import Response, redirect
from wren.middleware.protocol import Next


def file_response(file_path: Path, *, status: int = 200, cache_control: str | None = None) -> Response:
    """Read a file and build a response with a guessed content type."""
    content_type, _ = mimetypes.guess_type(str(file_path))
    if content_type is None:
        content_type = "application/octet-stream"
    elif content_type.startswith("text/") or content_type == "application/javascript":
        content_type += "; charset=utf-8"

    body = file_path.read_bytes()

    response = Response(body=body, content_type=content_type, status=status)
    if cache_control:
        response = response.with_header("Cache-Control", cache_control)
    return response


class StaticFiles:
    """Middleware that serves static files from a directory.

    Files are served for GET and HEAD requests whose path matches the
    configured prefix. Everything else falls through.

    Security: resolves symlinks and verifies the final path is within
    the configured directory (``Forbidden`` otherwise).

    Usage::

        app.add_middleware(StaticFiles(directory="./public", prefix="/"))
    """

    __slots__ = ("_cache_control", "_directory", "_index", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/",
        *,
        index: str = "index.html",
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

        # Root prefix "/" normalizes to "" so every path is a candidate
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    @property
    def directory(self) -> Path:
        return self._directory

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a static file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.path

        if self._prefix:
            if not path.startswith(self._prefix + "/") and path != self._prefix:
                return await next(request)
            relative = path[len(self._prefix) :].lstrip("/")
        else:
            relative = path.lstrip("/")

        file_path = (self._directory / relative).resolve() if relative else self._directory
        if not file_path.is_relative_to(self._directory):
            raise Forbidden(f"{request.path!r} resolves outside the public directory")

        if file_path.is_dir():
            index_path = file_path / self._index
            if not index_path.is_file():
                return await next(request)
            # The SPA shell at the root is served by the fallback so it is
            # read once instead of on every request.
            if not relative:
                return await next(request)
            if not path.endswith("/"):
                return redirect(path + "/", status=301)
            file_path = index_path

        if not file_path.is_file():
            return await next(request)

        return file_response(file_path, cache_control=self._cache_control)
