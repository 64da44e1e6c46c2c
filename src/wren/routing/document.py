"""Document boundary for views.

Views only need three things from a page: look up a mount point by id,
toggle its ``display`` style, and set the document title. ``Document``
and ``Node`` describe that surface; ``MemoryDocument`` and ``Element``
implement it in memory for headless use and tests.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Node(Protocol):
    """A DOM element as seen by the router."""

    id: str
    style: MutableMapping[str, str]
    attributes: MutableMapping[str, str]

    def scroll_into_view(self) -> None: ...


@runtime_checkable
class Document(Protocol):
    """The page: its title and its elements by id."""

    title: str

    def get_element(self, identifier: str) -> Node | None: ...


@dataclass(slots=True, eq=False)
class Element:
    """An in-memory element.

    Usage::

        link = Element("nav-task", attributes={"href": "/task", "data-link": ""})
    """

    id: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    style: dict[str, str] = field(default_factory=dict)
    text: str = ""
    scroll_count: int = 0

    @property
    def visible(self) -> bool:
        return self.style.get("display") != "none"

    @property
    def href(self) -> str | None:
        return self.attributes.get("href")

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def scroll_into_view(self) -> None:
        self.scroll_count += 1


class MemoryDocument:
    """An in-memory document holding elements by id."""

    __slots__ = ("_elements", "title")

    def __init__(self, title: str = "", elements: tuple[Element, ...] = ()) -> None:
        self.title = title
        self._elements: dict[str, Element] = {}
        for element in elements:
            self.add(element)

    def add(self, element: Element) -> Element:
        self._elements[element.id] = element
        return element

    def create_element(self, identifier: str, attributes: dict[str, str] | None = None) -> Element:
        """Create, register, and return an element with *identifier*."""
        return self.add(Element(identifier, attributes=dict(attributes or {})))

    def get_element(self, identifier: str) -> Element | None:
        return self._elements.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._elements

    def __repr__(self) -> str:
        return f"<MemoryDocument title={self.title!r} elements={sorted(self._elements)}>"
