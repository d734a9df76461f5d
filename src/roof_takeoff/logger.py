"""Logging for the roof_takeoff package.

Call setup_logging() once from the launcher; modules log through logging.getLogger(__name__),
which places them under the roof_takeoff logger configured here.
"""

from __future__ import annotations

import logging
import os

from .config import ENV_LOG_LEVEL

ROOT_NAME = "roof_takeoff"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_setup_done = False


def _level_from_env() -> int:
    raw = os.environ.get(ENV_LOG_LEVEL, "").strip().upper()
    level = logging.getLevelName(raw) if raw else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: int | str | None = None, format_string: str | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger. Later calls only adjust the level."""
    global _setup_done
    root = logging.getLogger(ROOT_NAME)

    if level is None:
        resolved = _level_from_env()
    elif isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level
    root.setLevel(resolved)

    if not _setup_done:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _setup_done = True
    return root
