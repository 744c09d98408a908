"""
twig command implementations.
"""
from .base import BaseCommand
from .init import InitCommand
from .add import AddCommand
from .commit import CommitCommand
from .rm import RmCommand
from .log import LogCommand, GlobalLogCommand
from .find import FindCommand
from .status import StatusCommand
from .branch import BranchCommand, RmBranchCommand
from .checkout import CheckoutCommand
from .reset import ResetCommand
from .merge import MergeCommand
from .remote import (
    AddRemoteCommand, RmRemoteCommand, PushCommand, FetchCommand, PullCommand
)
__all__ = [
    "BaseCommand",
    "InitCommand",
    "AddCommand",
    "CommitCommand",
    "RmCommand",
    "LogCommand",
    "GlobalLogCommand",
    "FindCommand",
    "StatusCommand",
    "BranchCommand",
    "RmBranchCommand",
    "CheckoutCommand",
    "ResetCommand",
    "MergeCommand",
    "AddRemoteCommand",
    "RmRemoteCommand",
    "PushCommand",
    "FetchCommand",
    "PullCommand",
]
