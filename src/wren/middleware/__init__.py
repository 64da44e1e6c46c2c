"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AccessLog -- Log every request on the ``wren.access`` logger
    CORSMiddleware -- Cross-Origin Resource Sharing
    HTTPSRedirect -- 301 plain HTTP requests to the HTTPS listener
    StaticFiles -- Serve files from the public directory

The innermost handler, ``SPAFallback``, serves the SPA shell or the 404 page.
"""

from wren.middleware.access_log import AccessLog
from wren.middleware.cors import CORSConfig, CORSMiddleware
from wren.middleware.protocol import Middleware, Next
from wren.middleware.redirect import HTTPSRedirect
from wren.middleware.spa import SPAFallback
from wren.middleware.static import StaticFiles

__all__ = [
    "AccessLog",
    "CORSConfig",
    "CORSMiddleware",
    "HTTPSRedirect",
    "Middleware",
    "Next",
    "SPAFallback",
    "StaticFiles",
]
