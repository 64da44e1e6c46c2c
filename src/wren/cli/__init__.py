"""Wren CLI — start the SPA server.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys


def _add_server_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Plain HTTP port")
    parser.add_argument(
        "--production",
        action="store_true",
        help="Run in production mode (multi-worker, HTTPS when certificates exist)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=one per CPU, production only)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — static server and router for single-page applications.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an App from an import string")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    _add_server_flags(run_parser)

    # -- wren serve -------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a public directory")
    serve_parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Public directory (default: public, or the config file's public_dir)",
    )
    serve_parser.add_argument(
        "--config",
        default=None,
        help="Path to an environment.json file",
    )
    serve_parser.add_argument("--https-port", type=int, default=None, help="HTTPS port")
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Development mode (single worker, auto-reload)",
    )
    _add_server_flags(serve_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wren.cli._run import run_server

        run_server(args)
    elif args.command == "serve":
        from wren.cli._run import serve_directory

        serve_directory(args)
