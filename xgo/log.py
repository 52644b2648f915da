"""Logging setup for the xgo command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Route xgo logging through a rich handler on stderr.

    Only the ``xgo`` package logger is touched, so calling this repeatedly
    replaces the handler instead of stacking new ones.
    """
    logger = logging.getLogger("xgo")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
