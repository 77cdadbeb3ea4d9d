# npminspector/utils/logger.py

"""
Centralized logger configuration for npminspector.

Provides a `get_logger(name: str)` function. On first request, it:
  - Configures a StreamHandler to stderr
  - Sets a default formatter: "YYYY-MM-DD HH:MM:SS LEVEL [logger_name] message"
  - Defaults to WARNING level so reports stay readable; override with
    the NPMINSPECTOR_LOG environment variable or `set_level`
"""

import logging
import os
import sys

from npminspector.utils.settings import ENV_LOG_LEVEL

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_BASE_NAME = "npminspector"
_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever sys.stderr is when a record is emitted."""

    def __init__(self):
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def _configure_base() -> logging.Logger:
    base = logging.getLogger(_BASE_NAME)
    if not base.handlers:
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DATEFMT))
        base.addHandler(handler)

        env_level = os.getenv(ENV_LOG_LEVEL, "").upper()
        level = logging.WARNING
        if env_level in _VALID_LEVELS:
            level = getattr(logging, env_level)
        base.setLevel(level)

        # Prevent double-logging: do not propagate to root
        base.propagate = False
    return base


def get_logger(name: str = None) -> logging.Logger:
    """
    Return a logger named `npminspector.<name>`. Module names that already
    carry the package prefix (i.e. `__name__`) are used as-is. All loggers
    share the handler configured on the `npminspector` base logger.
    """
    _configure_base()
    if not name or name == _BASE_NAME:
        return logging.getLogger(_BASE_NAME)
    if name.startswith(_BASE_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_BASE_NAME}.{name}")


def set_level(level: str) -> None:
    """
    Override the package log level (e.g. from a CLI flag).
    """
    level = level.upper()
    if level not in _VALID_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    _configure_base().setLevel(getattr(logging, level))
