"""Debug log file wiring.

The terminal belongs to the Textual UI, so log records go to a file only.
"""

from __future__ import annotations

import logging
from pathlib import Path

from restaurant_ops.config import DEBUG_LOG_PATH, LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_HANDLER_NAME = "restaurant-ops-debug-file"


def configure_logging(path: str | None = None, level: str | None = None) -> logging.Logger:
    """Attach the debug file handler to the package logger once and return it."""
    logger = logging.getLogger("restaurant_ops")
    logger.setLevel((level or LOG_LEVEL).upper())
    logger.propagate = False

    if any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        return logger

    log_file = Path(path or DEBUG_LOG_PATH)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        # An unwritable log location must never stop the app from starting.
        handler = logging.NullHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    return logger
