"""
Three-way merge of two branches around their split point.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple
from loguru import logger
from ..exceptions import (
    AlreadyUpToDate, DirtyState, EmptyCommit, NoCommonAncestor, NoSuchBranch,
    SelfMerge
)
from .index import Stage
from .objects import Commit
from .refs import BranchRegistry
from .store import CommitStore, ObjectStore
from .worktree import WorkingTree

class FileAction(str, Enum):
    """What a merge does with one path."""

    KEEP_CURRENT = "keep_current"
    TAKE_GIVEN = "take_given"
    REMOVE = "remove"
    CONFLICT = "conflict"

class MergeOutcome(str, Enum):
    FAST_FORWARD = "fast_forward"
    MERGED = "merged"

@dataclass
class MergeResult:
    """Result of a merge operation."""

    outcome: MergeOutcome
    commit: str
    split_point: str
    actions: Dict[str, FileAction] = field(default_factory=dict)

    @property
    def conflicts(self) -> Tuple[str, ...]:
        return tuple(sorted(
            path for path, action in self.actions.items()
            if action is FileAction.CONFLICT
        ))

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

def find_split_point(current_history: Sequence[str], given_history: Sequence[str]) -> str:
    """First commit of ``current_history`` (tip first) that ``given_history`` also holds."""
    given = set(given_history)
    for digest in current_history:
        if digest in given:
            return digest
    raise NoCommonAncestor("Branches share no common ancestor.")

def classify(split: Optional[str], current: Optional[str], given: Optional[str]) -> FileAction:
    """Decide one path's fate from its blob digest at the split point and on each side.

    ``None`` means the path is absent from that snapshot.
    """
    if current == given:
        return FileAction.KEEP_CURRENT
    if current == split:
        return FileAction.REMOVE if given is None else FileAction.TAKE_GIVEN
    if given == split:
        return FileAction.KEEP_CURRENT
    return FileAction.CONFLICT

def plan(split: Commit, current: Commit, given: Commit) -> Dict[str, FileAction]:
    """Classify every path any of the three snapshots knows about."""
    paths = set(split.files) | set(current.files) | set(given.files)
    return {
        path: classify(split.files.get(path), current.files.get(path), given.files.get(path))
        for path in sorted(paths)
    }

def conflict_content(current: Optional[bytes], given: Optional[bytes]) -> bytes:
    """Both versions of a conflicting file between conflict markers."""
    return (b"<<<<<<< HEAD\n" + (current or b"") + b"=======\n"
            + (given or b"") + b">>>>>>>\n")

class MergeEngine:
    """Merges a named branch into the active branch."""

    def __init__(self, objects: ObjectStore, commits: CommitStore,
                 branches: BranchRegistry, stage: Stage, worktree: WorkingTree):
        self.objects = objects
        self.commits = commits
        self.branches = branches
        self.stage = stage
        self.worktree = worktree

    def merge(self, given_branch: str) -> MergeResult:
        # Validate
        if not self.stage.is_empty():
            raise DirtyState("You have uncommitted changes.")
        if not self.branches.exists(given_branch):
            raise NoSuchBranch("A branch with that name does not exist.")
        current_branch = self.branches.head()
        if given_branch == current_branch:
            raise SelfMerge("Cannot merge a branch with itself.")

        current_history = self.branches.history(current_branch)
        given_history = self.branches.history(given_branch)
        current = self.commits.read(current_history[0])
        given = self.commits.read(given_history[0])
        self.worktree.check_untracked(current.files, given.files)

        # Find the split point
        split_digest = find_split_point(current_history, given_history)
        if split_digest == given.digest:
            raise AlreadyUpToDate("Given branch is an ancestor of the current branch.")
        if split_digest == current.digest:
            return self._fast_forward(current_branch, current, given, given_history)

        # Classify
        split = self.commits.read(split_digest)
        actions = plan(split, current, given)
        self.worktree.check_paths(actions)
        changes = [p for p, a in actions.items() if a is not FileAction.KEEP_CURRENT]
        if not changes:
            raise EmptyCommit("No changes added to the commit.")

        # Apply
        self._apply(actions, current, given)

        # Commit
        message = f"Merged {given_branch} into {current_branch}."
        commit = self.commits.create(
            message, current, self.stage.additions, self.stage.removals,
            second_parent=given,
        )
        self.commits.save(commit)
        self.branches.append(current_branch, commit.digest)
        self.stage.clear()

        result = MergeResult(MergeOutcome.MERGED, commit.digest, split_digest, actions)
        logger.info(
            f"Merged {given_branch} into {current_branch} as {commit.digest[:7]}"
            f" ({len(result.conflicts)} conflicts)"
        )
        return result

    def _fast_forward(self, branch: str, current: Commit, given: Commit,
                      given_history: List[str]) -> MergeResult:
        self.worktree.sync(current, given)
        self.branches.set_history(branch, given_history)
        logger.info(f"Fast-forwarded {branch} to {given.digest[:7]}")
        return MergeResult(MergeOutcome.FAST_FORWARD, given.digest, current.digest)

    def _apply(self, actions: Dict[str, FileAction], current: Commit, given: Commit) -> None:
        for path, action in actions.items():
            if action is FileAction.TAKE_GIVEN:
                blob_hash = given.files[path]
                self.worktree.restore_blob(path, blob_hash)
                self.stage.stage_file_contents(path, blob_hash)
            elif action is FileAction.REMOVE:
                self.worktree.delete_file(path)
                self.stage.stage_removal(path)
            elif action is FileAction.CONFLICT:
                content = conflict_content(
                    self._blob_or_none(current.files.get(path)),
                    self._blob_or_none(given.files.get(path)),
                )
                blob_hash = self.objects.put(content)
                self.worktree.write_file(path, content)
                self.stage.stage_file_contents(path, blob_hash)
                logger.warning(f"Merge conflict in {path}")
        self.stage.save()

    def _blob_or_none(self, blob_hash: Optional[str]) -> Optional[bytes]:
        if blob_hash is None:
            return None
        return self.objects.get(blob_hash)
