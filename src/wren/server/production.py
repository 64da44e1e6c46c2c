"""Production server.

Runs the wren app under pounce with one worker per CPU (``workers=0``);
pounce supervises the workers and replaces any that exit. When TLS
certificates are configured the app is served over HTTPS on
``https_port`` and a second, plain-HTTP pounce process listens on
``port`` so that ``HTTPSRedirect`` can bounce clients to the TLS
listener.
"""

from __future__ import annotations

import logging
import multiprocessing
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.app import App
    from wren.config import AppConfig

logger = logging.getLogger("wren.server")


def _server_config(
    config: AppConfig,
    host: str,
    port: int,
    *,
    workers: int,
    tls: bool,
) -> object:
    from pounce.config import ServerConfig

    return ServerConfig(
        host=host,
        port=port,
        workers=workers,
        lifecycle_logging=True,
        log_format=config.log_format,
        log_level=config.log_level,
        ssl_certfile=str(config.ssl_certfile) if tls else None,
        ssl_keyfile=str(config.ssl_keyfile) if tls else None,
    )


def _serve(app: App, server_config: object) -> None:
    from pounce.server import Server

    Server(server_config, app).run()


def run_production_server(
    app: App,
    host: str | None = None,
    port: int | None = None,
    *,
    workers: int | None = None,
) -> None:
    """Run a wren app in production mode.

    Args:
        app: Wren App instance.
        host: Bind address (default: ``app.config.host``).
        port: Plain HTTP port (default: ``app.config.port``).
        workers: Worker count (default: ``app.config.workers``; 0 = one
            per CPU).

    Example:
        >>> from myapp import app
        >>> from wren.server.production import run_production_server
        >>> run_production_server(app, workers=4)
    """
    config = app.config
    bind_host = host or config.host
    http_port = port or config.port
    worker_count = config.workers if workers is None else workers

    if not config.tls_enabled:
        logger.info("http://%s:%d", bind_host, http_port)
        _serve(app, _server_config(config, bind_host, http_port, workers=worker_count, tls=False))
        return

    # The plain listener only issues redirects, so one worker is enough.
    # fork keeps the already-built App without pickling it.
    context = multiprocessing.get_context("fork")
    http_listener = context.Process(
        target=_serve,
        args=(app, _server_config(config, bind_host, http_port, workers=1, tls=False)),
        name="wren-http",
        daemon=True,
    )
    http_listener.start()
    logger.info("http://%s:%d", bind_host, http_port)
    logger.info("https://%s:%d", bind_host, config.https_port)

    try:
        _serve(
            app,
            _server_config(config, bind_host, config.https_port, workers=worker_count, tls=True),
        )
    finally:
        http_listener.terminate()
        http_listener.join()
