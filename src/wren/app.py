"""Wren server application.

Mutable during setup (middleware, error handlers, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.middleware.access_log import AccessLog
from wren.middleware.cors import CORSConfig, CORSMiddleware
from wren.middleware.protocol import Middleware, Next
from wren.middleware.redirect import HTTPSRedirect
from wren.middleware.spa import SPAFallback
from wren.middleware.static import StaticFiles
from wren.server.errors import ErrorHandler
from wren.server.handler import build_pipeline, handle_request

logger = logging.getLogger("wren.server")


class App:
    """A static file server for single-page applications.

    Serves ``config.public_dir``; extension-less paths that match no
    file get the SPA shell so the client router can take over::

        app = App(AppConfig(public_dir="dist"))
        app.run()

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the pipeline even
        when several workers receive their first request at once.
    """

    __slots__ = (
        "_error_handlers",
        "_fallback",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pipeline",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._fallback: SPAFallback | None = None
        self._pipeline: Next | None = None

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware between the built-in ones and the static files."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator.

        Usage::

            @app.error(405)
            def method_not_allowed(request):
                return {"status": 405, "message": "Read-only"}
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    @property
    def middleware(self) -> tuple[Callable[..., Any], ...]:
        """The compiled middleware chain, outermost first."""
        self._ensure_frozen()
        return self._middleware

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server (dev or production based on config.debug).

        - **Development mode** (debug=True): single worker, plain HTTP,
          auto-reload
        - **Production mode** (debug=False): one worker per CPU, HTTPS
          when certificates are configured
        """
        from wren.server.logs import configure_logging

        configure_logging(self.config)
        self._ensure_frozen()

        if self.config.debug:
            from wren.server.dev import run_dev_server

            run_dev_server(self, host, port)
        else:
            from wren.server.production import run_production_server

            run_production_server(self, host=host, port=port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._pipeline is not None

        await handle_request(
            scope,
            receive,
            send,
            pipeline=self._pipeline,
            error_handlers=self._error_handlers,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so a missing public directory fails
        before the first request, then runs the registered hooks.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run the startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run the shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        cfg = self.config
        public_dir = Path(cfg.public_dir)
        if not public_dir.is_dir():
            msg = f"Public directory {str(public_dir)!r} does not exist."
            raise ConfigurationError(msg)

        middleware: list[Callable[..., Any]] = []
        if cfg.redirect_https and cfg.tls_enabled:
            middleware.append(HTTPSRedirect(cfg.port, cfg.https_port))
        middleware.append(AccessLog())
        if cfg.cors_origins:
            middleware.append(CORSMiddleware(CORSConfig(allow_origins=cfg.cors_origins)))
        middleware.extend(self._middleware_list)
        middleware.append(
            StaticFiles(
                public_dir,
                prefix="/",
                index=cfg.index_page,
                cache_control=cfg.cache_control,
            )
        )
        self._middleware = tuple(middleware)

        self._fallback = SPAFallback.from_directory(
            public_dir,
            index_page=cfg.index_page,
            not_found_page=cfg.not_found_page,
        )
        if self._fallback.index_html is None:
            logger.warning("No %s in %s; serving an empty shell", cfg.index_page, public_dir)

        self._pipeline = build_pipeline(self._middleware, self._fallback)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register middleware, error handlers, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "setup"
        return f"<App public_dir={str(self.config.public_dir)!r} {state}>"

