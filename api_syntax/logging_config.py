"""
Logging setup for api_syntax.

All modules obtain loggers through get_logger(__name__) so they share the
package logger configured here.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "api_syntax"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    rich_output: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Configure the package logger.

    Should be called once at application startup; library use works without it.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rich_output: Use a rich handler instead of a plain stream handler
        console: Console for the rich handler (defaults to stderr)
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under the package namespace
    """
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
