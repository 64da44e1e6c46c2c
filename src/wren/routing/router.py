"""Client-side router — the navigation state machine.

The router owns the navigation state and performs route transitions:

1. read the current URL from the navigation environment
2. resolve it against the route table (first match, else the default
   route with the pathname rewritten to the route's path)
3. if the route changed: exit the old view, consult the security gate,
   and enter the new view (or follow the gate's redirect)
4. notify the route-change callback
5. replace the visible URL with the resolved one (no new history entry)

Navigating again to the route that is already active skips steps 3 and
4 but still resynchronizes the URL.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import anyio

from wren._internal.invoke import invoke
from wren.routing.security import SecurityGate, check
from wren.routing.urls import normalize, parse_queries, split

if TYPE_CHECKING:
    from wren.routing.document import Document
    from wren.routing.navigation import NavigationEnvironment
    from wren.routing.route import Route, RouteTable

logger = logging.getLogger("wren.routing")

type RouteCallback = Callable[[Route], Awaitable[Any] | Any]

# Hooks that keep navigating from inside their own transition stop here
MAX_CHAINED_TRANSITIONS = 16


@dataclass(frozen=True, slots=True)
class NavigationState:
    """A snapshot of where the application is.

    Replaced as a whole on every transition, so ``params`` and
    ``queries`` always belong to ``route`` and ``pathname``.
    """

    pathname: str = ""
    search: str = ""
    hash: str = ""
    params: dict[str, str] = field(default_factory=dict)
    queries: dict[str, str] = field(default_factory=dict)
    route: Route | None = None
    previous_route: Route | None = None

    @property
    def url(self) -> str:
        return self.pathname + self.search + self.hash


class Router:
    """Navigation state machine over a resolved ``RouteTable``.

    Transitions are serialized with an ``anyio.Lock``: view hooks may
    await, and a second navigation must not interleave with the first.
    Within a transition the old view's ``exit()`` completes before the
    new view's ``enter()`` starts.

    A hook that navigates while its own transition is running (a view
    forwarding to another page, an ``on_route`` callback that redirects)
    does not wait for the lock it is running under. The running
    transition notices the location moved and loops onto it once it has
    finished.
    """

    __slots__ = (
        "_lock",
        "_owner",
        "document",
        "environment",
        "on_route",
        "redirect",
        "security",
        "state",
        "table",
    )

    def __init__(
        self,
        table: RouteTable,
        environment: NavigationEnvironment,
        document: Document,
        *,
        security: SecurityGate | None = None,
        on_route: RouteCallback | None = None,
        redirect: Callable[[str], Any] | None = None,
    ) -> None:
        self.table = table
        self.environment = environment
        self.document = document
        self.security = security
        self.on_route = on_route
        self.redirect = redirect or environment.assign
        self.state = NavigationState()
        self._lock = anyio.Lock()
        self._owner: int | None = None

    # -- State accessors --

    @property
    def routes(self) -> tuple[Route, ...]:
        return self.table.routes

    @property
    def route(self) -> Route | None:
        return self.state.route

    @property
    def previous_route(self) -> Route | None:
        return self.state.previous_route

    @property
    def pathname(self) -> str:
        return self.state.pathname

    @property
    def search(self) -> str:
        return self.state.search

    @property
    def hash(self) -> str:
        return self.state.hash

    @property
    def params(self) -> dict[str, str]:
        return self.state.params

    @property
    def queries(self) -> dict[str, str]:
        return self.state.queries

    # -- Transitions --

    def locate(self, url: str, previous_route: Route | None) -> NavigationState:
        """Resolve *url* into a new state, applying the default-route fallback."""
        pathname, search, hash_ = split(url)
        route, pathname, params = self.table.resolve(normalize(pathname))
        return NavigationState(
            pathname=pathname,
            search=search,
            hash=hash_,
            params=params,
            queries=parse_queries(search),
            route=route,
            previous_route=previous_route,
        )

    async def change_route(self) -> None:
        """Transition to the environment's current location."""
        if len(self.table) == 0:
            return

        task = anyio.get_current_task().id
        if self._owner == task:
            # Called from a hook of the running transition, which picks up
            # the new location when it finishes
            return

        async with self._lock:
            self._owner = task
            try:
                await self._run_transitions()
            finally:
                self._owner = None

    async def _run_transitions(self) -> None:
        for _ in range(MAX_CHAINED_TRANSITIONS):
            url = self.environment.location
            await self._transition(url)
            if self.environment.location == url:
                self.environment.replace(self.state.url)
                return

        logger.warning(
            "navigation chain exceeded %d transitions; stopping at %s",
            MAX_CHAINED_TRANSITIONS,
            self.state.url,
        )
        self.environment.replace(self.state.url)

    async def _transition(self, url: str) -> None:
        previous = self.state.route
        self.state = self.locate(url, previous)
        route = self.state.route
        assert route is not None

        if route is not previous:
            logger.debug("route %s -> %s (%s)", previous and previous.path, route.path, url)

            if previous is not None:
                await previous.view.exit()

            decision = await check(self.security, route)
            if not decision.blocked:
                await route.view.enter()
            elif decision.next:
                await self._follow_redirect(decision.next, previous)
            else:
                logger.debug("route %s blocked", route.path)
                self.document.title = route.view.title

            if self.on_route is not None:
                await invoke(self.on_route, self.state.route)

    async def _follow_redirect(self, target: str, previous: Route | None) -> None:
        """Adopt the security gate's redirect target, or leave the app.

        A target matching a known route is entered in place, without
        consulting the gate again. Anything else is a hard navigation.
        """
        pathname, _, _ = split(target)
        if self.table.find(normalize(pathname)) is None:
            logger.debug("redirect %s leaves the application", target)
            await invoke(self.redirect, target)
            return

        self.state = self.locate(target, previous)
        assert self.state.route is not None
        logger.debug("redirected to %s", self.state.route.path)
        await self.state.route.view.enter()

    def __repr__(self) -> str:
        current = self.state.route.path if self.state.route else None
        return f"<Router routes={len(self.table)} route={current!r}>"
