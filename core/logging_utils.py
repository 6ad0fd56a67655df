"""JSON structured logging.

Modules take a plain named logger from :func:`get_logger`.  The app calls
:func:`configure_logging` once at start-up, which attaches a single JSON
handler to the package loggers; records still propagate to the root logger.
"""
import json
import logging
import sys
import time
from typing import IO, Optional

from core.config import get_settings

LOGGER_ROOTS = ("core", "ui", "export")
HANDLER_NAME = "refi-json"


class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # extra={"context": {...}} is flattened into the line
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update(ctx)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> logging.Handler:
    """Attach the JSON handler to the package loggers; safe to call on every rerun."""
    level = (level or get_settings().log_level).upper()
    handler = _find_handler()
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(JsonLogFormatter())
        for name in LOGGER_ROOTS:
            logging.getLogger(name).addHandler(handler)
    for name in LOGGER_ROOTS:
        logging.getLogger(name).setLevel(level)
    return handler


def _find_handler() -> Optional[logging.Handler]:
    for h in logging.getLogger(LOGGER_ROOTS[0]).handlers:
        if h.get_name() == HANDLER_NAME:
            return h
    return None


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
