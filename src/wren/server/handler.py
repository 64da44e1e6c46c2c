"""ASGI handler — translates ASGI scope/messages to wren types.

Converts the scope to a typed Request, runs it through the middleware
chain around the SPA fallback, and sends the Response back through
ASGI send().
"""

from collections.abc import Awaitable, Callable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next
from wren.server.errors import ErrorHandler, handle_http_error, handle_internal_error
from wren.server.sender import send_response


def build_pipeline(
    middleware: tuple[Callable[..., Any], ...],
    endpoint: Callable[[Request], Awaitable[Response]],
) -> Next:
    """Wrap *middleware* around *endpoint*, first middleware outermost."""
    handler: Next = endpoint
    for mw in reversed(middleware):

        async def call_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = call_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Next,
    error_handlers: dict[int | type, ErrorHandler],
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers)

    await send_response(response, send, head=request.method == "HEAD")
