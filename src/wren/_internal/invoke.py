"""Call sync or async callables uniformly.

Lifecycle hooks, view hooks, security gates, and route-change callbacks
can all be ``def`` or ``async def``. This keeps the await-if-needed
check in one place::

    result = await invoke(view.on_enter)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
