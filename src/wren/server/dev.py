"""Development server.

One pounce worker on plain HTTP with auto-reload. Besides the working
directory, the public directory is watched for the SPA's asset types,
so rebuilding the bundle restarts the worker and the shell is read
again.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.app import App

logger = logging.getLogger("wren.server")

WATCHED_EXTENSIONS = (".html", ".css", ".js", ".json")


def run_dev_server(
    app: App,
    host: str | None = None,
    port: int | None = None,
    *,
    app_path: str | None = None,
) -> None:
    """Serve *app* for development.

    Args:
        app: Wren App instance.
        host: Bind address (default: ``app.config.host``).
        port: Bind port (default: ``app.config.port``).
        app_path: ``"module:attribute"`` import string; when given, pounce
            reimports the app on reload instead of reusing this object.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = app.config
    bind_host = host or config.host
    bind_port = port or config.port
    reload_include = tuple(dict.fromkeys((*WATCHED_EXTENSIONS, *config.reload_include)))
    reload_dirs = (str(config.public_dir), *config.reload_dirs)

    logger.info("http://%s:%d (reload)", bind_host, bind_port)
    server_config = ServerConfig(
        host=bind_host,
        port=bind_port,
        workers=1,
        reload=True,
        reload_include=reload_include,
        reload_dirs=reload_dirs,
    )
    Server(server_config, app, app_path=app_path).run()
