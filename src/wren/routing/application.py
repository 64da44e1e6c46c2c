"""Client application — composition root of the router.

Wires the route table, the router, the views, the security gate, and
the route-change callback to a navigation environment and a document::

    app = Application(
        MemoryHistory("/task/42"),
        MemoryDocument("Tasks", elements=...),
        routes=[
            ("/", Dashboard),
            ("/task", Task),
            ("/task/[id]", TaskItem),
            ("/settings", Settings),
        ],
        security=security,
        on_route=on_route,
    )
    await app.run()
    await app.navigate("/settings")

Nothing is global: views receive the application in their constructor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from wren.routing.route import RouteSpec, RouteTable, ViewFactory
from wren.routing.router import RouteCallback, Router
from wren.routing.urls import split

if TYPE_CHECKING:
    from wren.routing.document import Document, Node
    from wren.routing.navigation import NavigationEnvironment
    from wren.routing.route import Route
    from wren.routing.security import SecurityGate
    from wren.routing.view import View

logger = logging.getLogger("wren.routing")

# Elements carrying this attribute are navigated in-app when clicked
LINK_ATTRIBUTE = "data-link"


class Application:
    """The client-side application.

    Route registration is fixed once ``run()`` has resolved the table.
    State accessors return None until then.
    """

    __slots__ = (
        "_routes",
        "_unsubscribe",
        "document",
        "environment",
        "on_route",
        "router",
        "security",
        "views",
    )

    def __init__(
        self,
        environment: NavigationEnvironment,
        document: Document,
        routes: Iterable[RouteSpec | tuple[str, ViewFactory]] = (),
        *,
        security: SecurityGate | None = None,
        on_route: RouteCallback | None = None,
    ) -> None:
        self.environment = environment
        self.document = document
        self._routes: list[RouteSpec | tuple[str, ViewFactory]] = list(routes)
        self.security = security
        self.on_route = on_route
        self.router: Router | None = None
        self.views: dict[str, View] = {}
        self._unsubscribe: Callable[[], None] | None = None

    # -- Setup --

    def add_route(self, path: str, view: ViewFactory) -> None:
        """Register a route. Registration order is match priority."""
        if self.router is not None:
            msg = "Cannot add routes after the application has started."
            raise RuntimeError(msg)
        self._routes.append(RouteSpec(path, view))

    async def run(self) -> None:
        """Resolve the routes, start listening, and route the current URL."""
        if self.router is not None:
            msg = "Application is already running."
            raise RuntimeError(msg)

        table = RouteTable(self._routes, self)
        self.router = Router(
            table,
            self.environment,
            self.document,
            security=self._check_security,
            on_route=self._route_changed,
            redirect=self.redirect,
        )
        self._unsubscribe = self.environment.subscribe(self.router.change_route)
        logger.debug("application started with %d routes", len(table))
        await self.router.change_route()

    def stop(self) -> None:
        """Stop listening for back/forward events."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # Indirection so security / on_route may be assigned after run()
    def _check_security(self, route: Route) -> Any:
        if self.security is None:
            return False, None
        return self.security(route)

    def _route_changed(self, route: Route) -> Any:
        if self.on_route is None:
            return None
        return self.on_route(route)

    # -- Navigation --

    async def navigate(self, url: str) -> None:
        """Push *url* onto the history, route to it, and scroll to its fragment."""
        self.environment.push(url)
        if self.router is not None:
            await self.router.change_route()
        self.scroll_to_hash(split(self.environment.location)[2])

    def redirect(self, url: str) -> None:
        """Leave the application: hard navigation to *url*."""
        self.environment.assign(url)

    def scroll_to_hash(self, hash_: str) -> None:
        """Scroll the element whose id is the fragment into view, if there is one.

        Best effort: the route has already changed, so a failing lookup or
        scroll is logged and dropped.
        """
        identifier = hash_.lstrip("#")
        if not identifier:
            return
        try:
            element = self.document.get_element(identifier)
            if element is None:
                logger.debug("no element for fragment %s", hash_)
                return
            element.scroll_into_view()
        except Exception:
            logger.debug("could not scroll to fragment %s", hash_, exc_info=True)

    async def handle_click(self, element: Node) -> bool:
        """Intercept a click on *element*.

        Returns True when the click was handled in-app (the caller
        should prevent the default action).
        """
        if LINK_ATTRIBUTE not in element.attributes:
            return False
        href = element.attributes.get("href")
        if not href:
            return False
        await self.navigate(href)
        return True

    # -- State accessors --

    @property
    def route(self) -> Route | None:
        return self.router.route if self.router else None

    @property
    def pathname(self) -> str | None:
        return self.router.pathname if self.router else None

    @property
    def search(self) -> str | None:
        return self.router.search if self.router else None

    @property
    def hash(self) -> str | None:
        return self.router.hash if self.router else None

    @property
    def params(self) -> dict[str, str] | None:
        return self.router.params if self.router else None

    @property
    def queries(self) -> dict[str, str] | None:
        return self.router.queries if self.router else None

    def __repr__(self) -> str:
        return f"<Application routes={len(self._routes)} pathname={self.pathname!r}>"
