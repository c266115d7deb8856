"""Centralized logging configuration for the ``csvimporter`` package.

``configure_logging(...)`` attaches a single handler to the package root
logger (``"csvimporter"``). It is called once by the CLI at startup.

Library modules never attach their own handlers. They call
``logging.getLogger(__name__)`` and rely on this configuration, or on
the host application's.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "csvimporter"
_CONFIGURED = False

DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


class _StderrHandler(logging.StreamHandler):
    """Stream handler that follows ``sys.stderr`` when it is replaced."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _parse_level(level: int | str | None) -> int:
    # Env override when explicit ``level`` is None
    if level is None:
        level = os.getenv("CSVIMPORTER_LOG_LEVEL")
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        # Accept numeric strings or standard level names (INFO/DEBUG/etc.).
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger.

    The handler is attached only once; later calls just adjust the level.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level-name string (e.g., ``"INFO"``). If
        ``None``, defaults to the ``CSVIMPORTER_LOG_LEVEL`` environment
        variable when set, otherwise ``logging.WARNING``.
    fmt:
        Optional logging format string. Defaults to ``DEFAULT_FORMAT``.
    stream:
        Output stream for the handler. Defaults to the current ``sys.stderr``.
    """

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    numeric_level = _parse_level(level)

    if _CONFIGURED:
        logger.setLevel(numeric_level)
        return

    # Remove the NullHandler so records reach the real handler.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    # Avoid double emission via the root logger.
    logger.propagate = False

    _CONFIGURED = True
