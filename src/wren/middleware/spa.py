"""Single-page application fallback.

The innermost handler of a wren app. Paths without a file extension
get the SPA shell so the client router can resolve them; anything else
that reached this point is a missing asset and gets the 404 page.

Both pages are read once, when the app freezes. When the public
directory has no ``index.html`` / ``404.html``, minimal built-in pages
are rendered with kida instead.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kida import Environment

from wren.errors import MethodNotAllowed
from wren.http.request import Request
from wren.http.response import Response

_SAFE_METHODS = frozenset({"GET", "HEAD"})

DEFAULT_INDEX_SOURCE = "<pre></pre>"
DEFAULT_NOT_FOUND_SOURCE = "<pre>{{ method }} {{ url }} Not Found</pre>"


def _read_page(directory: Path, name: str) -> str | None:
    page = (directory / name).resolve()
    if not page.is_relative_to(directory) or not page.is_file():
        return None
    return page.read_text(encoding="utf-8")


def is_virtual_route(path: str) -> bool:
    """True if *path* looks like a client-side route rather than a file.

    A path is virtual when its last segment has no ``.``.
    """
    last = path.rstrip("/").rpartition("/")[2]
    return "." not in last


@dataclass(frozen=True, slots=True)
class SPAFallback:
    """Serve the SPA shell or the 404 page.

    Build with ``SPAFallback.from_directory()``; the page sources are
    captured and the built-in 404 template compiled at construction.
    """

    index_html: str | None
    not_found_html: str | None
    not_found_template: Any  # kida template for the built-in 404 page

    @classmethod
    def from_directory(
        cls,
        directory: str | Path,
        *,
        index_page: str = "index.html",
        not_found_page: str = "404.html",
    ) -> "SPAFallback":
        root = Path(directory).resolve()
        return cls(
            index_html=_read_page(root, index_page),
            not_found_html=_read_page(root, not_found_page),
            not_found_template=Environment(autoescape=True).from_string(DEFAULT_NOT_FOUND_SOURCE),
        )

    async def __call__(self, request: Request) -> Response:
        if request.method not in _SAFE_METHODS:
            raise MethodNotAllowed(_SAFE_METHODS)

        if is_virtual_route(request.path):
            body = self.index_html if self.index_html is not None else DEFAULT_INDEX_SOURCE
            return Response(body=body).with_header("Cache-Control", "no-cache")

        if self.not_found_html is not None:
            return Response(body=self.not_found_html, status=404)

        body = self.not_found_template.render({"method": request.method, "url": request.url})
        return Response(body=body, status=404)
