"""Route security gate.

A gate is a callable (sync or async) that receives the candidate route
and returns ``(blocked, next)``::

    def security(route):
        if route.path != "/login" and not session.authenticated:
            return block("/login")
        return allow()

``next`` is ignored when ``blocked`` is false. ``block()`` without a
target suppresses the transition silently.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, NamedTuple

from wren._internal.invoke import invoke

if TYPE_CHECKING:
    from wren.routing.route import Route


class Decision(NamedTuple):
    """Result of a security check."""

    blocked: bool
    next: str | None = None


type SecurityGate = Callable[[Route], Decision | tuple[bool, str | None] | Awaitable[Any]]


def allow() -> Decision:
    return Decision(False)


def block(next: str | None = None) -> Decision:
    return Decision(True, next or None)


async def check(gate: SecurityGate | None, route: Route) -> Decision:
    """Run *gate* against *route*. No gate means never blocked."""
    if gate is None:
        return allow()
    blocked, next_url = await invoke(gate, route)
    if not blocked:
        return allow()
    return block(next_url)
