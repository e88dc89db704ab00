"""Shared logger setup for the dataprovider package.

All loggers handed out by :func:`get_logger` are children of a single
``dataprovider`` base logger, which only carries a :class:`logging.NullHandler`.
:func:`configure_logging` adds a stderr handler whose level comes from the
``DATAPROVIDER_LOG_LEVEL`` environment variable (``WARNING`` when unset).
"""

import logging
import os
import sys
from typing import Optional

__all__ = ["BASE_LOGGER_NAME", "configure_logging", "get_logger"]

BASE_LOGGER_NAME = "dataprovider"
LEVEL_ENV_VAR = "DATAPROVIDER_LOG_LEVEL"

_CONFIGURED_ATTR = "_dataprovider_configured"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: Optional[str], default: int = logging.WARNING) -> int:
    """Map a level name such as ``"debug"`` to its logging constant.

    Unknown or empty values fall back to ``default``.
    """
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


_base = logging.getLogger(BASE_LOGGER_NAME)
_base.addHandler(logging.NullHandler())


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Send ``dataprovider`` log records to stderr.

    The library itself only attaches a :class:`logging.NullHandler`;
    applications that want its output call this once. Repeated calls leave
    the handlers alone and only update the level.

    Args:
        level: Level name such as ``"debug"``. Defaults to the value of
            ``DATAPROVIDER_LOG_LEVEL``, or ``WARNING`` when that is unset.

    Returns:
        The base ``dataprovider`` logger.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if level is None:
        level = os.getenv(LEVEL_ENV_VAR)
    logger.setLevel(_parse_level(level))
    if getattr(logger, _CONFIGURED_ATTR, False):
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
    logger.addHandler(handler)
    setattr(logger, _CONFIGURED_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> logging.Logger:
    """Return a logger below the shared ``dataprovider`` base logger.

    Args:
        name: Dotted logger name. Names outside the ``dataprovider`` namespace
            are nested under it so that they share its handler and level.

    Returns:
        The :class:`logging.Logger` for ``name``.

    Example:
        >>> log = get_logger("dataprovider.container")
        >>> log.debug("take %r", "name")
    """
    if name == BASE_LOGGER_NAME:
        return _base
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
