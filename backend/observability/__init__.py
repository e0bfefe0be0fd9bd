"""
Observability Layer

RESPONSIBILITY: Logging setup for the backend and frontend packages

WHAT THIS LAYER MUST NOT DO:
============================
- Modify system behavior
- Filter or interpret events (only record them)
"""

from __future__ import annotations
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOGGER_NAMES = ("backend", "frontend")

_HANDLER_MARK = "_timeline_handler"


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Attach one stream handler to the package loggers.

    Safe to call repeatedly; only the level changes on later calls.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level)
        if not any(getattr(h, _HANDLER_MARK, False) for h in package_logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            setattr(handler, _HANDLER_MARK, True)
            package_logger.addHandler(handler)
