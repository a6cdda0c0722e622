"""
Logging setup for applications built on sextant.

The library modules only emit records (DEBUG: tokenization, mode toggles,
state transitions) on loggers under "sextant"; nothing is printed until a
handler is installed. configure_logging() installs a single rich handler on
the "sextant" logger, writing to stderr so command output stays clean.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from .utils import *

logger = logging.getLogger("sextant")


def configure_logging(level="WARNING", /, console=Unset):
    """
    Route sextant's log records to a rich handler.

    Parameters
    - level: logging level name or number for the "sextant" logger.
    - console: rich Console to write to (stderr by default).

    Calling it again replaces the handler installed by the previous call.
    Records stop propagating to the root logger, so they are printed once.
    """
    if isinstance(level, str):
        level = level.upper()
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True) if console is Unset else console,
        show_path=False,
        rich_tracebacks=True,
    )
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(level)
    return handler


__all__ = (
    "configure_logging",
)
