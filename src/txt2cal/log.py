"""Logging setup for txt2cal.

txt2cal is used both as a library and through its CLI.  As a library it only
emits records on the ``txt2cal`` logger tree and leaves handler configuration
to the host application (the package installs a :class:`logging.NullHandler`).
The CLI calls :func:`setup_logging`, which gives the ``txt2cal`` logger its
own stderr handler and stops propagation so the root logger of an embedding
process is never touched.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "txt2cal"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Marks the handler owned by setup_logging.
_HANDLER_ATTR = "_txt2cal_log_handler"


def _owned_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return handler
    return None


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Send ``txt2cal`` log records to *stream* in the CLI format.

    Repeated calls update the level of the existing handler instead of
    adding another one.  A different *stream* replaces the handler.

    Args:
        level: A standard logging level name (``"DEBUG"``, ``"INFO"``, ...).
        stream: Destination for log lines.  Defaults to ``sys.stderr`` at
            call time.

    Returns:
        The configured package logger.

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    target = stream if stream is not None else sys.stderr
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logger.propagate = False

    handler = _owned_handler(logger)
    if handler is not None and getattr(handler, "stream", None) is not target:
        logger.removeHandler(handler)
        handler = None

    if handler is None:
        handler = logging.StreamHandler(target)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    handler.setLevel(numeric_level)
    return logger

