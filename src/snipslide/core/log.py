# log.py
# SPDX-License-Identifier: MIT
"""Logging for snipslide.

Everything logs under the ``snipslide`` logger, which carries a NullHandler
so embedding applications stay quiet until they opt in. The CLI opts in
from the ``[logging]`` config table (see ``LoggingConfig``), and
``--log-level`` overrides the level from there. Rebalancer split and club
decisions are emitted at DEBUG, so ``level = "DEBUG"`` traces how each
slide was cut.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "DEFAULT_LOG_FORMAT",
    "get_logger",
    "configure_logging",
]

PACKAGE_LOGGER_NAME = "snipslide"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def _resolve_level(level: int | str) -> int:
    """Map a level name (any case) or number to a logging level.

    Raises:
        ValueError: For names the logging module does not know.
    """
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``name`` (usually ``__name__``) or the package logger."""
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def _stream_handler(logger: logging.Logger) -> logging.StreamHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            return handler
    return None


def configure_logging(
    *,
    level: int | str = logging.WARNING,
    stream: IO[str] | None = None,
    fmt: str | None = None,
    datefmt: str | None = None,
    propagate: bool | None = None,
    logger_name: str = PACKAGE_LOGGER_NAME,
) -> logging.Logger:
    """Route a snipslide logger to a stream at ``level``.

    Repeated calls reuse the logger's one StreamHandler: a closed stream is
    swapped for ``stream``, and an explicit ``fmt`` replaces the formatter.
    This lets the CLI apply the config file first and a ``--log-level``
    override second.

    Args:
        level (int | str): Level number or name.
        stream (IO[str] | None): Target stream; defaults to sys.stderr.
        fmt (str | None): Format string; DEFAULT_LOG_FORMAT for a new handler.
        datefmt (str | None): Date format string.
        propagate (bool | None): Whether records reach ancestor loggers.
            None leaves propagation on so root handlers (pytest caplog)
            still see records.
        logger_name (str): Logger to configure.

    Returns:
        logging.Logger: The configured logger.

    Raises:
        ValueError: If ``level`` is not a known level.
    """
    logger = get_logger(logger_name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = True if propagate is None else bool(propagate)

    target = stream if stream is not None else sys.stderr
    handler = _stream_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(target)
        handler.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_LOG_FORMAT, datefmt=datefmt))
        logger.addHandler(handler)
        return logger

    if getattr(handler.stream, "closed", False):
        handler.stream = target
    if fmt is not None:
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return logger
