"""Logging setup for snippetz.

Every module obtains its logger through :func:`get_logger`; handlers are
only installed when an entry point calls :func:`setup_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "snippetz"
DEFAULT_FORMAT = "%(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the ``snippetz`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: int | str = logging.WARNING,
    console: Console | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Configure the package logger with a rich handler.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Logging level (name or number).
        console: Console to log to (defaults to stderr).
        fmt: Message format.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
