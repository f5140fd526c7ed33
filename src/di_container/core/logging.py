"""Logging setup for the ``di_container`` package logger.

The root logger belongs to the application, so only the package logger is
touched here: its level always, and a console handler when asked for.
"""

from __future__ import annotations

import logging

from .config import LoggingSettings

PACKAGE_LOGGER = "di_container"
_CONSOLE_HANDLER_NAME = "di_container.console"

_STRUCTURED_FORMAT = "{asctime} {levelname} {name} {message}"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _formatter(structured: bool) -> logging.Formatter:
    if structured:
        return logging.Formatter(_STRUCTURED_FORMAT, style="{")
    return logging.Formatter(_PLAIN_FORMAT)


def _drop_console_handler(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() == _CONSOLE_HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()


def configure_logging(settings: LoggingSettings) -> logging.Logger:
    """Apply ``settings`` to the package logger and return it.

    Calling it again replaces the console handler installed by a previous
    call; handlers added by the application are left alone.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(settings.level)
    _drop_console_handler(logger)

    if settings.console:
        handler = logging.StreamHandler()
        handler.set_name(_CONSOLE_HANDLER_NAME)
        handler.setFormatter(_formatter(settings.structured))
        logger.addHandler(handler)
        logger.propagate = False
    else:
        logger.propagate = True
    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
