"""
Structured logging for the gasless SDK.

Every module logs through a child of the ``gasless_sdk`` logger:

    >>> from gasless_sdk.utils.logging import get_logger
    >>> _logger = get_logger(__name__)
    >>> _logger.info("Operation submitted", extra={"stage": "execute"})

The library installs only a NullHandler. Applications call
``configure_logging()`` (or configure ``logging`` themselves) to see output.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "gasless_sdk"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger inside the SDK namespace.

    Args:
        name: Module name, usually ``__name__``. Names outside the
            ``gasless_sdk`` namespace are nested under it.

    Returns:
        Configured logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return _root_logger
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a handler to the SDK root logger and set its level.

    Calling this twice replaces the previously configured handler instead
    of stacking a second one.
    """
    for existing in list(_root_logger.handlers):
        if getattr(existing, "_gasless_configured", False):
            _root_logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler._gasless_configured = True  # type: ignore[attr-defined]
    _root_logger.addHandler(handler)
    set_level(level)
    return _root_logger


def set_level(level: Union[int, str]) -> None:
    if isinstance(level, str):
        level = level.upper()
    _root_logger.setLevel(level)
    _root_logger.disabled = False


def enable_debug() -> None:
    set_level(logging.DEBUG)


def disable_logging() -> None:
    _root_logger.disabled = True


__all__ = [
    "ROOT_LOGGER_NAME",
    "get_logger",
    "configure_logging",
    "set_level",
    "enable_debug",
    "disable_logging",
]
