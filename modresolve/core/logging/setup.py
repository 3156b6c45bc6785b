# modresolve/core/logging/setup.py
from __future__ import annotations
import logging
import os
from typing import IO

from .formatters import DevFormatter, JsonFormatter

__all__ = [
    "ROOT_LOGGER",
    "LOG_LEVEL_ENV_VAR",
    "configureLogging",
]



ROOT_LOGGER = "modresolve"
LOG_LEVEL_ENV_VAR = "MODRESOLVE_LOG_LEVEL"



def configureLogging(
    level: int | str | None = None,
    *,
    json: bool = False,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """
    Attach a console handler to the library logger.

    The library itself only installs a NullHandler; applications that want
    resolver diagnostics call this once.

      - level: logging level or name; falls back to $MODRESOLVE_LOG_LEVEL, then INFO
      - json: one-line JSON records instead of the human formatter
      - stream: target stream (stderr by default)

    Calling it again replaces the previously installed handler.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        levelName = level.strip().upper()
        resolved = logging.getLevelName(levelName)
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        level = resolved

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_modresolveConsole", False):
            logger.removeHandler(handler)

    consoleHandler = logging.StreamHandler(stream)
    consoleHandler.setLevel(level)
    consoleHandler.setFormatter(JsonFormatter() if json else DevFormatter())
    consoleHandler._modresolveConsole = True  # type: ignore[attr-defined]

    logger.setLevel(level)
    logger.addHandler(consoleHandler)
    return consoleHandler
