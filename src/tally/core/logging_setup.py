"""
Logging setup.

The terminal belongs to the UI while Tally runs, so records go to a log file
and never to stdout/stderr. Modules log through ``logging.getLogger(__name__)``;
this module only attaches the handler to the ``tally`` package logger.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tally.core.config import LoggingConfig

_HANDLER_NAME = "tally-file"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(config: LoggingConfig, path: Path) -> logging.Logger:
    """Attach a file handler to the ``tally`` logger. Safe to call repeatedly."""
    root = logging.getLogger("tally")
    root.setLevel(config.level)
    root.propagate = False

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.set_name(_HANDLER_NAME)
    if config.format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
    root.addHandler(handler)
    return root
