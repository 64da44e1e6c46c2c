"""``wren run`` and ``wren serve`` — start the server.

``run`` resolves an import string to an App; ``serve`` builds one for a
public directory, optionally configured by an ``environment.json`` file.
Either way the app goes to the development server (debug, single
worker, reload) or the production server (multi-worker, HTTPS when
certificates are configured).
"""

import argparse
import dataclasses
import importlib
import sys
from pathlib import Path
from typing import Any

from wren.app import App
from wren.config import AppConfig, load_config
from wren.errors import ConfigurationError
from wren.server.logs import configure_logging


def resolve_app(target: str) -> App:
    """Resolve ``module:attribute`` to an App.

    The attribute (default ``app``) may be an App, an AppConfig to serve
    as-is, or a zero-argument factory returning either.
    """
    module_name, _, attribute = target.partition(":")
    obj = getattr(importlib.import_module(module_name), attribute or "app")
    if callable(obj) and not isinstance(obj, App):
        obj = obj()

    if isinstance(obj, AppConfig):
        return App(obj)
    if not isinstance(obj, App):
        msg = f"{target!r} resolved to {type(obj).__name__}, not a wren.App or AppConfig"
        raise TypeError(msg)
    return obj


def _start(app: App, args: argparse.Namespace, *, app_path: str | None = None) -> None:
    host = args.host or app.config.host
    port = args.port or app.config.port

    configure_logging(app.config)

    if args.production or not app.config.debug:
        from wren.server.production import run_production_server

        run_production_server(app, host=host, port=port, workers=args.workers)
    else:
        from wren.server.dev import run_dev_server

        run_dev_server(app, host, port, app_path=app_path)


def run_server(args: argparse.Namespace) -> None:
    """Start the server for an app given as ``module:attribute``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    # Reload can only reimport a target that names the App itself
    module_name, _, attribute = args.app.partition(":")
    direct = getattr(sys.modules[module_name], attribute or "app") is app
    _start(app, args, app_path=args.app if direct else None)


def build_config(args: argparse.Namespace) -> AppConfig:
    """Merge ``environment.json`` (if any) with command-line overrides."""
    overrides: dict[str, Any] = {}
    if args.directory is not None:
        overrides["public_dir"] = args.directory
    if args.https_port is not None:
        overrides["https_port"] = args.https_port
    if args.debug:
        overrides["debug"] = True

    config_path = Path(args.config) if args.config else None
    if config_path is not None:
        return load_config(config_path, **overrides)
    return dataclasses.replace(AppConfig(), **overrides)


def serve_directory(args: argparse.Namespace) -> None:
    """Start the server for a public directory."""
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not Path(config.public_dir).is_dir():
        print(f"Error: public directory {str(config.public_dir)!r} does not exist", file=sys.stderr)
        raise SystemExit(1)

    _start(App(config), args)
