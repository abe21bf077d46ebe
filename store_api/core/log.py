"""Logging setup shared by the app and the scripts."""

from __future__ import annotations

import logging

_FORMAT = "[%(name)s] %(levelname)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a console handler to the package logger (idempotent)."""
    root = logging.getLogger("store_api")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
