"""URL utilities for the client router.

Route patterns use bracketed parameters::

    "/task/[id]"   matches "/task/42"   -> {"id": "42"}

Parameter values are one or more word characters or hyphens; a
parameter never spans a ``/``.
"""

import re
from urllib.parse import parse_qsl

from wren.errors import RoutePatternError

# Capture group substituted for each [name] segment
PARAM_PATTERN = r"([\w\-]+)"

_MULTI_SLASH = re.compile(r"/{2,}")
_PARAM = re.compile(r"\[([^\[\]/]*)\]")
_PARAM_NAME = re.compile(r"^[\w\-]+$")


def normalize(path: str) -> str:
    """Collapse repeated slashes and drop one trailing slash.

    The root path ``/`` (and anything two characters or shorter) keeps
    its trailing slash. Idempotent::

        normalize("a//b///c/") == "a/b/c"
        normalize("/") == "/"
    """
    path = _MULTI_SLASH.sub("/", path)
    if len(path) > 2 and path.endswith("/"):
        path = path[:-1]
    return path


def param_names(pattern: str) -> tuple[str, ...]:
    """Return the bracketed parameter names of *pattern*, left to right."""
    return tuple(_PARAM.findall(pattern))


def validate_pattern(pattern: str) -> None:
    """Reject malformed route patterns.

    Raises ``RoutePatternError`` for unbalanced or nested brackets,
    empty or invalid parameter names, and duplicate names.
    """
    # With every well-formed [name] removed, no bracket may remain.
    leftover = _PARAM.sub("", pattern)
    if "[" in leftover or "]" in leftover:
        msg = f"Route pattern {pattern!r} has unbalanced or nested brackets."
        raise RoutePatternError(msg)

    seen: set[str] = set()
    for name in param_names(pattern):
        if not _PARAM_NAME.match(name):
            msg = (
                f"Route pattern {pattern!r} has an invalid parameter name {name!r}. "
                "Use letters, digits, underscores, or hyphens, e.g. [id]."
            )
            raise RoutePatternError(msg)
        if name in seen:
            msg = f"Route pattern {pattern!r} repeats the parameter [{name}]."
            raise RoutePatternError(msg)
        seen.add(name)


def to_matcher(pattern: str) -> str:
    """Convert a route pattern into an anchored regular expression source.

    ``"/task/[id]"`` becomes ``r"^\\/task\\/([\\w\\-]+)$"``: one capture
    group per parameter, in declaration order.
    """
    parts: list[str] = []
    position = 0
    for match in _PARAM.finditer(pattern):
        parts.append(_escape(pattern[position : match.start()]))
        parts.append(PARAM_PATTERN)
        position = match.end()
    parts.append(_escape(pattern[position:]))
    return "^" + "".join(parts) + "$"


def _escape(literal: str) -> str:
    return re.escape(literal).replace("/", r"\/")


def split(url: str) -> tuple[str, str, str]:
    """Split *url* into ``(pathname, search, hash)``.

    The fragment runs from the first ``#`` to the end and is removed
    before the search is split off at the first ``?``. Missing parts are
    empty strings::

        split("/a/b?x=1#frag") == ("/a/b", "?x=1", "#frag")
        split("/a/b") == ("/a/b", "", "")
    """
    pathname, sep, fragment = url.partition("#")
    hash_ = sep + fragment
    pathname, sep, query = pathname.partition("?")
    return pathname, sep + query, hash_


def parse_queries(search: str) -> dict[str, str]:
    """Parse a search string into a mapping.

    A leading ``?`` is optional. Blank values are kept; when a key
    repeats, the last occurrence wins.
    """
    return dict(parse_qsl(search.lstrip("?"), keep_blank_values=True))
