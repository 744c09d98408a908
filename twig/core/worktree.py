"""
Reconciles the working directory with commit snapshots (checkout, reset).
"""
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Set
from loguru import logger
from ..exceptions import (
    AlreadyOnBranch, FileNotInCommit, IntegrityError, NoSuchBranch,
    ObjectNotFound, UntrackedFileConflict
)
from .index import Stage
from .objects import Commit, hash_content
from .refs import BranchRegistry
from .store import CommitStore, ObjectStore

class WorkingTree:
    """The files under the working root, excluding the repository directory."""

    def __init__(self, work_root: Path, twig_dir: Path, objects: ObjectStore,
                 commits: CommitStore, branches: BranchRegistry, stage: Stage):
        self.work_root = Path(work_root)
        self.twig_dir = Path(twig_dir)
        self.objects = objects
        self.commits = commits
        self.branches = branches
        self.stage = stage

    def files(self) -> List[str]:
        """All working files as POSIX paths relative to the working root."""
        result = []
        for file_path in self.work_root.rglob('*'):
            if not file_path.is_file():
                continue
            if file_path == self.twig_dir or self.twig_dir in file_path.parents:
                continue
            result.append(file_path.relative_to(self.work_root).as_posix())
        return sorted(result)

    def _full_path(self, path: str) -> Path:
        """Absolute location of ``path``; refuses anything that leaves the working root."""
        full_path = self.work_root / path
        root = self.work_root.resolve()
        resolved = full_path.resolve()
        if resolved == root or root not in resolved.parents:
            raise IntegrityError(f"Path {path} is outside the working tree")
        return full_path

    def read_file(self, path: str) -> Optional[bytes]:
        full_path = self._full_path(path)
        if not full_path.is_file():
            return None
        with open(full_path, 'rb') as f:
            return f.read()

    def write_file(self, path: str, content: bytes) -> None:
        full_path = self._full_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        with open(full_path, 'wb') as f:
            f.write(content)

    def restore_blob(self, path: str, blob_hash: str) -> None:
        """Overwrite (or create) a working file with a stored blob."""
        try:
            content = self.objects.get(blob_hash)
        except ObjectNotFound:
            raise IntegrityError(f"Blob {blob_hash} for {path} is missing from the object store")
        self.write_file(path, content)

    def delete_file(self, path: str) -> None:
        full_path = self._full_path(path)
        if full_path.is_file():
            full_path.unlink()

    def untracked(self, tracked: Iterable[str]) -> Set[str]:
        """Working files that are neither staged, staged for removal, nor in ``tracked``."""
        known = set(tracked) | set(self.stage.additions) | self.stage.removals
        return {path for path in self.files() if path not in known}

    def check_untracked(self, tracked: Iterable[str], touched: Iterable[str]) -> None:
        """Raise if an untracked file would be overwritten or deleted.

        ``touched`` holds the paths the pending operation will write or remove.
        """
        in_the_way = self.untracked(tracked) & set(touched)
        if in_the_way:
            raise UntrackedFileConflict(in_the_way)

    def check_paths(self, paths: Iterable[str]) -> None:
        for path in paths:
            self._full_path(path)

    def sync(self, current: Commit, target: Commit) -> None:
        """Make the working tree match ``target``, deleting files only ``current`` tracks."""
        self.check_paths(target.files)
        for path, blob_hash in target.files.items():
            self.restore_blob(path, blob_hash)
        for path in current.files:
            if path not in target.files:
                self.delete_file(path)

    def head_commit(self) -> Commit:
        return self.commits.read(self.branches.tip(self.branches.head()))

    def checkout_branch(self, name: str) -> Commit:
        """Switch to branch ``name``, rewriting the working tree to its tip."""
        if not self.branches.exists(name):
            raise NoSuchBranch("No such branch exists.")
        current_branch = self.branches.head()
        if name == current_branch:
            raise AlreadyOnBranch("No need to checkout the current branch.")

        current = self.head_commit()
        target = self.commits.read(self.branches.tip(name))
        self.check_untracked(current.files, target.files)

        self.sync(current, target)
        self.stage.clear()
        self.branches.set_head(name)
        logger.info(f"Switched from {current_branch} to {name} at {target.digest[:7]}")
        return target

    def checkout_file(self, path: str, commit_id: Optional[str] = None) -> None:
        """Restore one file from a commit (the HEAD commit by default)."""
        commit = self.head_commit() if commit_id is None else self.commits.read(commit_id)
        if path not in commit.files:
            raise FileNotInCommit("File does not exist in that commit.")
        self.restore_blob(path, commit.files[path])
        logger.debug(f"Checked out {path} from {commit.digest[:7]}")

    def reset(self, commit_id: str) -> Commit:
        """Move the current branch forward to ``commit_id`` and match its snapshot."""
        target = self.commits.read(commit_id)
        current = self.head_commit()
        self.check_untracked(current.files, target.files)

        self.sync(current, target)
        self.stage.clear()
        branch = self.branches.head()
        self.branches.append(branch, target.digest)
        logger.info(f"Reset {branch} to {target.digest[:7]}")
        return target

    def modified_files(self, head: Commit) -> Mapping[str, str]:
        """Tracked or staged files whose working copy differs, as path -> 'modified'/'deleted'."""
        result = {}
        working = set(self.files())
        for path, blob_hash in head.files.items():
            if path in self.stage.removals or path in self.stage.additions:
                continue
            if path not in working:
                result[path] = "deleted"
            elif hash_content(self.read_file(path)) != blob_hash:
                result[path] = "modified"
        for path, blob_hash in self.stage.additions.items():
            if path not in working:
                result[path] = "deleted"
            elif hash_content(self.read_file(path)) != blob_hash:
                result[path] = "modified"
        return result
