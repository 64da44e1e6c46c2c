"""Request logging middleware."""

import logging

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next

logger = logging.getLogger("wren.access")


class AccessLog:
    """Log ``METHOD URL`` for every request before it is handled.

    Records carry an ``endpoint`` attribute so the JSON file handler
    installed by ``configure_logging()`` can emit it as a field.
    """

    __slots__ = ()

    async def __call__(self, request: Request, next: Next) -> Response:
        endpoint = f"{request.method} {request.url}"
        logger.info(endpoint, extra={"endpoint": endpoint})
        return await next(request)
