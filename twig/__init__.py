"""
twig - a small content-addressed version control system.
"""
from loguru import logger

__version__ = "0.3.0"
__author__ = "twig"
__description__ = "twig - a small content-addressed version control system"
from .core.repository import Twig
from .core.merge import MergeOutcome, MergeResult
from .exceptions import TwigError, PreconditionError, UserInputError

logger.disable("twig")

__all__ = [
    "Twig",
    "MergeOutcome",
    "MergeResult",
    "TwigError",
    "PreconditionError",
    "UserInputError",
    "__version__"
]
