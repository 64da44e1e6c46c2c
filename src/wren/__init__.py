"""Wren — a static file server and client-side router for single-page applications.

Serve a built SPA::

    from wren import App, AppConfig

    app = App(AppConfig(public_dir="dist"))
    app.run()

Route in the page (or headless, with the in-memory environment)::

    from wren.routing import Application, MemoryDocument, MemoryHistory

    app = Application(MemoryHistory("/"), document, routes=[("/", Dashboard)])
    await app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "Application",
    "ConfigurationError",
    "HTTPError",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "RoutePatternError",
    "View",
    "WrenError",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name in ("AppConfig", "load_config"):
        from wren import config as _config

        return getattr(_config, name)

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from wren.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("Application", "View"):
        from wren import routing as _routing

        return getattr(_routing, name)

    if name in ("ConfigurationError", "HTTPError", "NotFound", "RoutePatternError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
