"""Navigation environment — the router's view of location and history.

The router never touches a browser directly. It reads the current URL,
pushes or replaces history entries, performs hard navigations, and
listens for back/forward events through a ``NavigationEnvironment``.

``MemoryHistory`` is an in-memory implementation with the same
semantics as the browser History API (same-origin entries, replace
without a new entry, back/forward notifications).
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urljoin, urlsplit, urlunsplit

from wren._internal.invoke import invoke

logger = logging.getLogger("wren.routing")

type Listener = Callable[[], Awaitable[Any] | Any]


@runtime_checkable
class NavigationEnvironment(Protocol):
    """Location and history primitives consumed by the router."""

    @property
    def location(self) -> str:
        """The current URL as pathname + search + hash."""
        ...

    def push(self, url: str) -> None: ...

    def replace(self, url: str) -> None: ...

    def assign(self, url: str) -> None:
        """Hard navigation: leave the single-page application."""
        ...

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* on back/forward navigation. Returns an unsubscribe function."""
        ...


class MemoryHistory:
    """An in-memory history stack.

    Usage::

        history = MemoryHistory("/task/42?tab=notes")
        history.push("/settings")
        await history.back()        # listeners run, location is /task/42?tab=notes

    Absolute URLs on the same origin are reduced to their path, query,
    and fragment; other origins raise ``ValueError``. ``assign()`` only
    records the target in ``assigned``.
    """

    __slots__ = ("_entries", "_index", "_listeners", "assigned", "origin")

    def __init__(self, url: str = "/", *, origin: str = "http://localhost") -> None:
        self.origin = origin.rstrip("/")
        self._entries: list[str] = []
        self._index = -1
        self._listeners: list[Listener] = []
        self.assigned: list[str] = []
        self._entries.append(self._relative(url))
        self._index = 0

    # -- NavigationEnvironment --

    @property
    def location(self) -> str:
        return self._entries[self._index]

    def push(self, url: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(self._relative(url))
        self._index += 1

    def replace(self, url: str) -> None:
        self._entries[self._index] = self._relative(url)

    def assign(self, url: str) -> None:
        logger.debug("hard navigation to %s", url)
        self.assigned.append(url)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- Back / forward --

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    async def go(self, delta: int) -> bool:
        """Move *delta* entries and notify listeners. False if out of range."""
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return False
        self._index = target
        for listener in list(self._listeners):
            await invoke(listener)
        return True

    async def back(self) -> bool:
        return await self.go(-1)

    async def forward(self) -> bool:
        return await self.go(1)

    # -- Internal --

    def _relative(self, url: str) -> str:
        current = self._entries[self._index] if self._entries else "/"
        absolute = urljoin(self.origin + current, url)
        parts = urlsplit(absolute)
        if f"{parts.scheme}://{parts.netloc}" != self.origin:
            msg = f"Cannot navigate history to {url!r}: not on origin {self.origin!r}"
            raise ValueError(msg)
        return urlunsplit(("", "", parts.path or "/", parts.query, parts.fragment))

    def __repr__(self) -> str:
        return f"<MemoryHistory {self.location!r} ({self._index + 1}/{len(self._entries)})>"
