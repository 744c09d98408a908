"""
Core twig modules.
"""
from .repository import Twig, StatusReport
from .objects import Blob, Commit
from .store import ObjectStore, CommitStore
from .index import Stage
from .refs import BranchRegistry
from .worktree import WorkingTree
from .merge import FileAction, MergeEngine, MergeOutcome, MergeResult
from .remote import RemoteRegistry, RemoteSync
__all__ = [
    "Twig",
    "StatusReport",
    "Blob",
    "Commit",
    "ObjectStore",
    "CommitStore",
    "Stage",
    "BranchRegistry",
    "WorkingTree",
    "FileAction",
    "MergeEngine",
    "MergeOutcome",
    "MergeResult",
    "RemoteRegistry",
    "RemoteSync"
]
