"""Logging setup for the wren server.

Console output is one ``METHOD URL`` line per request; the optional log
file receives JSON lines::

    {"level": "info", "message": "GET /task", "endpoint": "GET /task",
     "timestamp": "2024-05-01 12:00:00"}
"""

import json
import logging
from pathlib import Path

from wren.config import AppConfig

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_MARK = "_wren_handler"


class JSONFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        endpoint = getattr(record, "endpoint", None)
        if endpoint is not None:
            entry["endpoint"] = endpoint
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry["timestamp"] = self.formatTime(record, _TIMESTAMP_FORMAT)
        return json.dumps(entry)


def configure_logging(config: AppConfig) -> logging.Logger:
    """Install wren's console and file handlers on the ``wren`` logger.

    Safe to call more than once: handlers installed by a previous call
    are replaced, not duplicated.
    """
    root = logging.getLogger("wren")
    root.setLevel(config.log_level.upper())

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(message)s"))
    setattr(console, _HANDLER_MARK, True)
    root.addHandler(console)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JSONFormatter())
        setattr(file_handler, _HANDLER_MARK, True)
        root.addHandler(file_handler)

    return root
