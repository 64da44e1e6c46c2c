"""Route definitions and the resolved route table."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren.routing.urls import normalize, param_names, to_matcher, validate_pattern

if TYPE_CHECKING:
    from wren.routing.view import View

# Builds a route's view. Receives the owning Application.
type ViewFactory = Callable[[Any], View]


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """A route as registered: a path pattern bound to a view factory.

    ``view`` is usually a ``View`` subclass; it is called once, with the
    Application, when the route table is resolved.
    """

    path: str
    view: ViewFactory


@dataclass(frozen=True, slots=True, eq=False)
class Route:
    """A resolved route. Compared by identity.

    ``pattern`` is the path as registered, ``path`` its normalized form.
    ``matcher`` is anchored at both ends with one group per parameter.
    """

    pattern: str
    path: str
    matcher: re.Pattern[str]
    names: tuple[str, ...]
    view: View = field(repr=False)

    @classmethod
    def resolve(cls, spec: RouteSpec, app: Any) -> Route:
        """Normalize, validate, and compile *spec*; build its view once."""
        path = normalize(spec.path)
        validate_pattern(path)
        return cls(
            pattern=spec.path,
            path=path,
            matcher=re.compile(to_matcher(path)),
            names=param_names(path),
            view=spec.view(app),
        )

    def match(self, pathname: str) -> dict[str, str] | None:
        """Return the captured parameters, or None if *pathname* doesn't match."""
        m = self.matcher.match(pathname)
        if m is None:
            return None
        return dict(zip(self.names, m.groups(), strict=True))


class RouteTable:
    """An ordered, immutable table of resolved routes.

    Lookup is first-match in registration order: ``/[x]`` registered
    before ``/settings`` captures ``/settings`` as ``{"x": "settings"}``.
    """

    __slots__ = ("_routes",)

    def __init__(self, specs: Iterable[RouteSpec | tuple[str, ViewFactory]], app: Any) -> None:
        routes: list[Route] = []
        for spec in specs:
            if not isinstance(spec, RouteSpec):
                spec = RouteSpec(*spec)
            routes.append(Route.resolve(spec, app))
        self._routes: tuple[Route, ...] = tuple(routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    @property
    def default(self) -> Route | None:
        """The fallback route: the first one registered."""
        return self._routes[0] if self._routes else None

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def find(self, pathname: str) -> Route | None:
        """Return the first route whose matcher accepts *pathname*."""
        for route in self._routes:
            if route.matcher.match(pathname):
                return route
        return None

    def resolve(self, pathname: str) -> tuple[Route | None, str, dict[str, str]]:
        """Resolve *pathname* to ``(route, pathname, params)``.

        When nothing matches, the default route is used and the pathname
        is rewritten to that route's path. An empty table yields
        ``(None, pathname, {})``.
        """
        route = self.find(pathname)
        if route is None:
            route = self.default
            if route is None:
                return None, pathname, {}
            pathname = route.path
        return route, pathname, route.match(pathname) or {}
