"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. ``load_config()`` builds one from an
``environment.json`` file.
"""

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, https_port=3443, public_dir="dist")

    CORS is off by default: no ``Access-Control-*`` headers are sent until
    ``cors_origins`` lists the origins allowed to read the public
    directory. ``cors_origins=("*",)`` opens it to every origin.
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 8080  # Plain HTTP listener
    https_port: int = 8443  # TLS listener (used when certificates are configured)
    debug: bool = False

    # Reload (development mode — requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".html", ".css")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Static files / single-page application
    public_dir: str | Path = "public"
    index_page: str = "index.html"  # SPA shell served for extension-less paths
    not_found_page: str = "404.html"
    cache_control: str = "public, max-age=3600"

    # Security
    redirect_https: bool = True  # Only effective when TLS is configured
    cors_origins: tuple[str, ...] = ()  # Empty = CORS off; ("*",) = any origin

    # Production
    workers: int = 0  # 0 = auto-detect from CPU count

    # Logging
    log_file: str | Path | None = "info.log"
    log_level: str = "info"
    log_format: str = "json"

    # TLS
    ssl_certfile: str | Path | None = "SSL/certificate.crt"
    ssl_keyfile: str | Path | None = "SSL/certificate.key"

    @property
    def tls_enabled(self) -> bool:
        """True when both certificate files are configured and present."""
        if not self.ssl_certfile or not self.ssl_keyfile:
            return False
        return Path(self.ssl_certfile).is_file() and Path(self.ssl_keyfile).is_file()


# Upper-case keys used by the legacy environment.json launcher
_LEGACY_KEYS: dict[str, str] = {
    "PORT": "port",
    "PORT_HTTPS": "https_port",
    "HOST": "host",
    "WORKERS": "workers",
}

_PATH_FIELDS = frozenset({"public_dir", "log_file", "ssl_certfile", "ssl_keyfile"})

_TUPLE_FIELDS = frozenset({"reload_include", "reload_dirs", "cors_origins"})


def load_config(path: str | Path, **overrides: Any) -> AppConfig:
    """Load an ``AppConfig`` from a JSON file.

    Keys may be ``AppConfig`` field names or the legacy ``PORT`` /
    ``PORT_HTTPS`` / ``HOST`` / ``WORKERS`` names. Relative paths
    (public directory, log file, certificates) resolve against the
    file's directory. Keyword *overrides* win over the file.

    Raises ``ConfigurationError`` if the file is missing, is not a JSON
    object, or contains unknown keys.
    """
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        msg = f"Configuration file not found: {config_path}"
        raise ConfigurationError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Configuration file {config_path} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc

    if not isinstance(raw, dict):
        msg = f"Configuration file {config_path} must contain a JSON object"
        raise ConfigurationError(msg)

    known = {f.name for f in dataclasses.fields(AppConfig)}
    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _LEGACY_KEYS.get(key, key)
        if name not in known:
            msg = f"Unknown configuration key {key!r} in {config_path}"
            raise ConfigurationError(msg)
        if name in _TUPLE_FIELDS and isinstance(value, list):
            value = tuple(value)
        if name in _PATH_FIELDS and isinstance(value, str) and not Path(value).is_absolute():
            value = str(config_path.parent / value)
        values[name] = value

    values.update(overrides)
    return AppConfig(**values)
