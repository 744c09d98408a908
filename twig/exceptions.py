"""
Custom exceptions for twig.
"""

class TwigError(Exception):
    """Base exception for all twig errors."""
    pass

class UserInputError(TwigError):
    """Raised when a command is given the wrong number or form of arguments."""
    pass

class PreconditionError(TwigError):
    """Raised when an operation cannot run against the current repository state."""
    pass

class IntegrityError(TwigError):
    """Raised when stored objects contradict their own digests or references."""
    pass

# Repository

class RepositoryError(PreconditionError):
    """Raised when repository operations fail."""
    pass

class NotInitialized(RepositoryError):
    pass

class AlreadyInitialized(RepositoryError):
    pass

# Objects and commits

class ObjectError(PreconditionError):
    """Raised when object operations fail."""
    pass

class ObjectNotFound(ObjectError):
    pass

class CommitNotFound(ObjectError):
    pass

class AmbiguousCommitId(CommitNotFound):
    """Raised when an abbreviated commit id matches more than one commit."""

    def __init__(self, prefix: str, matches):
        self.prefix = prefix
        self.matches = sorted(matches)
        super().__init__(
            f"Commit id {prefix} is ambiguous ({len(self.matches)} matches)."
        )

# Staging area

class StageError(PreconditionError):
    """Raised when staging area operations fail."""
    pass

class EmptyCommit(StageError):
    pass

class MissingCommitMessage(StageError):
    pass

class WorkingFileNotFound(StageError):
    pass

class NothingToRemove(StageError):
    pass

# Branches

class BranchError(PreconditionError):
    """Raised when branch operations fail."""
    pass

class BranchExists(BranchError):
    pass

class NoSuchBranch(BranchError):
    pass

class CannotRemoveCurrentBranch(BranchError):
    pass

# Checkout and reset

class CheckoutError(PreconditionError):
    """Raised when checkout operations fail."""
    pass

class AlreadyOnBranch(CheckoutError):
    pass

class FileNotInCommit(CheckoutError):
    pass

class UntrackedFileConflict(CheckoutError):
    """Raised when an untracked working file would be overwritten or deleted."""

    def __init__(self, paths):
        self.paths = sorted(paths)
        super().__init__(
            "There is an untracked file in the way; delete it, or add and commit it first."
        )

# Merge

class MergeError(PreconditionError):
    """Raised when merge operations fail."""
    pass

class SelfMerge(MergeError):
    pass

class DirtyState(MergeError):
    pass

class AlreadyUpToDate(MergeError):
    pass

class NoCommonAncestor(MergeError):
    pass

# Remotes

class RemoteError(PreconditionError):
    """Raised when remote operations fail."""
    pass

class RemoteExists(RemoteError):
    pass

class NoSuchRemote(RemoteError):
    pass

class RemoteNotFound(RemoteError):
    pass

class RemoteBranchNotFound(RemoteError):
    pass

class NeedsPull(RemoteError):
    pass
