"""
Logging setup for the twig command line.

Library code logs through loguru's shared ``logger``; the package disables
its own namespace on import, and :func:`configure_logging` turns it back on
with a single stderr sink.
"""
import os
import sys
from typing import Optional, TextIO
from loguru import logger

LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> | {message}"
LOG_LEVEL_ENV = "TWIG_LOG_LEVEL"

def resolve_level(verbose: bool = False, configured: Optional[str] = None) -> str:
    """Pick the log level: ``--verbose``, then the environment, then the repository config."""
    if verbose:
        return "DEBUG"
    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        return env_level.upper()
    return (configured or "WARNING").upper()

def configure_logging(level: str = "WARNING", sink: Optional[TextIO] = None) -> int:
    """Replace loguru's handlers with one sink at ``level`` and enable twig's messages.

    Returns the id of the added handler.
    """
    logger.remove()
    handler_id = logger.add(
        sink or sys.stderr,
        level=level,
        format=LOG_FORMAT,
        colorize=False,
    )
    logger.enable("twig")
    return handler_id
