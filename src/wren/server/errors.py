"""Error handling for wren requests.

Maps HTTPError exceptions and unexpected failures to responses, using
handlers registered with ``@app.error()`` or JSON defaults of the form
``{"status": 404, "message": "Not Found"}``.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")

ErrorHandler = Callable[..., Any]


def to_response(value: Any, status: int = 200) -> Response:
    """Convert an error handler's return value to a Response.

    Accepts a ``Response``, a ``str`` (HTML body), a ``dict`` / ``list``
    (JSON body), or a ``(value, status)`` tuple.
    """
    if isinstance(value, tuple):
        body, status = value
        return to_response(body, status)
    if isinstance(value, Response):
        return value
    if isinstance(value, (dict, list)):
        return Response.json(value, status=status)
    return Response(body=str(value), status=status)


async def call_error_handler(
    handler: ErrorHandler,
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc)
    arguments and may be sync or async.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return to_response(result)


def error_body(status: int, message: str) -> Response:
    return Response.json({"status": status, "message": message}, status=status)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, ErrorHandler],
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        response = error_body(exc.status, exc.detail or f"Error {exc.status}")

    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, ErrorHandler],
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        if response.status == 200:
            response = response.with_status(500)
        return response

    return error_body(500, "Internal Server Error")
