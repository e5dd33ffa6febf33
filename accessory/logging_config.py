"""Logging setup for accessory.

Every module grabs a logger with ``get_logger(__name__)``; the CLI calls
``configure_logging`` once to attach a rich console handler.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "accessory"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the accessory hierarchy."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(
    *, verbose: bool = False, console: Console | None = None
) -> logging.Logger:
    """Configure the accessory logger with a rich handler on stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations don't duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
