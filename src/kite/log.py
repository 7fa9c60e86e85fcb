"""Logging setup.

The terminal is in raw mode while editing, so log records never go to
stderr. Set ``KITE_LOG`` to a file path to capture them there, and
``KITE_LOG_LEVEL`` to change the level (``DEBUG`` by default).
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(environ: Mapping[str, str] | None = None) -> logging.Handler:
    environ = os.environ if environ is None else environ
    root = logging.getLogger("kite")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(logging.NOTSET)
    root.propagate = True

    path = environ.get("KITE_LOG")
    if not path:
        handler: logging.Handler = logging.NullHandler()
        root.addHandler(handler)
        return handler

    level_name = environ.get("KITE_LOG_LEVEL", "DEBUG").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.DEBUG
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return handler
