"""Client-side routing — URL parsing, route matching, view lifecycle.

Runs against an injected navigation environment and document, so the
same application code drives a browser bridge or the in-memory
``MemoryHistory`` / ``MemoryDocument`` pair.
"""

from wren.routing.application import LINK_ATTRIBUTE, Application
from wren.routing.document import Document, Element, MemoryDocument, Node
from wren.routing.navigation import MemoryHistory, NavigationEnvironment
from wren.routing.route import Route, RouteSpec, RouteTable
from wren.routing.router import NavigationState, Router
from wren.routing.security import Decision, allow, block
from wren.routing.urls import normalize, parse_queries, split, to_matcher
from wren.routing.view import Lifecycle, View

__all__ = [
    "LINK_ATTRIBUTE",
    "Application",
    "Decision",
    "Document",
    "Element",
    "Lifecycle",
    "MemoryDocument",
    "MemoryHistory",
    "NavigationEnvironment",
    "NavigationState",
    "Node",
    "Route",
    "RouteSpec",
    "RouteTable",
    "Router",
    "View",
    "allow",
    "block",
    "normalize",
    "parse_queries",
    "split",
    "to_matcher",
]
