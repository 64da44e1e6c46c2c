"""Views — units of page content shown and hidden by the router.

Every view owns a mount point (an element found by id). ``enter()``
shows it and sets the document title; ``exit()`` hides it. Those steps
always run; page-specific behavior goes in ``on_enter`` / ``on_exit``,
which may be sync or async::

    class TaskItem(View):
        identifier = "task-item"
        title = "Task Item"

        def on_enter(self) -> None:
            label = self.app.document.get_element("task-item__id")
            label.text = self.app.params["id"]

Views are built once, when the route table is resolved, and live for
the application's lifetime. Mount points are toggled, never recreated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from wren._internal.invoke import invoke
from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from wren.routing.application import Application
    from wren.routing.document import Node


@runtime_checkable
class Lifecycle(Protocol):
    """What the router needs from a view."""

    title: str

    async def enter(self) -> None: ...

    async def exit(self) -> None: ...


def show(element: Node) -> None:
    element.style["display"] = "block"


def hide(element: Node) -> None:
    element.style["display"] = "none"


class View:
    """Base view: a mount point plus a title.

    ``identifier`` and ``title`` may be class attributes or constructor
    arguments. The title defaults to the document's title at startup.
    Raises ``ConfigurationError`` when the document has no element with
    the view's identifier.
    """

    identifier: str = ""
    title: str = ""

    def __init__(
        self,
        app: Application,
        identifier: str | None = None,
        title: str | None = None,
    ) -> None:
        self.app = app
        self.identifier = identifier or self.identifier
        if not self.identifier:
            msg = f"{type(self).__name__} has no identifier for its mount point."
            raise ConfigurationError(msg)

        element = app.document.get_element(self.identifier)
        if element is None:
            msg = f"No element with id {self.identifier!r} for view {type(self).__name__}."
            raise ConfigurationError(msg)
        self.element = element
        hide(self.element)

        self.title = title or self.title or app.document.title
        app.views[self.identifier] = self

    async def enter(self) -> None:
        """Show the mount point, set the title, then run ``on_enter``."""
        show(self.element)
        self.app.document.title = self.title
        await invoke(self.on_enter)

    async def exit(self) -> None:
        """Hide the mount point, then run ``on_exit``."""
        hide(self.element)
        await invoke(self.on_exit)

    def on_enter(self) -> None:
        """Page-specific work after the view is shown."""

    def on_exit(self) -> None:
        """Page-specific work after the view is hidden."""

    @property
    def visible(self) -> bool:
        return self.element.style.get("display") != "none"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} #{self.identifier} {self.title!r}>"
