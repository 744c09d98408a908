"""
Content-addressed storage for blobs and commits.
"""
import os
from pathlib import Path
from typing import Iterator, List, Mapping, Iterable, Optional
from loguru import logger
from ..exceptions import (
    AmbiguousCommitId, CommitNotFound, EmptyCommit, MissingCommitMessage,
    ObjectNotFound
)
from .objects import Commit, NO_PARENT, hash_content

DIGEST_LENGTH = 40

def atomic_write(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` through a temporary file and a rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_file = path.with_name(path.name + '.tmp')
    try:
        with open(temp_file, 'wb') as f:
            f.write(data)
        os.replace(temp_file, path)
    except BaseException:
        # Clean up temp file if something went wrong
        if temp_file.exists():
            temp_file.unlink()
        raise

class ObjectStore:
    """Append-only blob storage keyed by the SHA-1 of the content."""

    def __init__(self, objects_dir: Path):
        self.objects_dir = Path(objects_dir)

    def _path(self, digest: str) -> Path:
        return self.objects_dir / digest

    def put(self, content: bytes) -> str:
        """Store ``content`` and return its digest. Storing the same bytes twice is a no-op."""
        digest = hash_content(content)
        obj_file = self._path(digest)
        if obj_file.exists():
            logger.debug(f"Blob {digest[:7]} already stored")
            return digest
        atomic_write(obj_file, content)
        logger.debug(f"Stored blob {digest[:7]} ({len(content)} bytes)")
        return digest

    def get(self, digest: str) -> bytes:
        obj_file = self._path(digest)
        if not obj_file.is_file():
            raise ObjectNotFound(f"Object {digest} not found")
        with open(obj_file, 'rb') as f:
            return f.read()

    def exists(self, digest: str) -> bool:
        return self._path(digest).is_file()

    def copy_to(self, other: 'ObjectStore', digest: str) -> bool:
        """Copy one blob into another store, returning False when it was already there."""
        if other.exists(digest):
            return False
        other.put(self.get(digest))
        return True

class CommitStore:
    """The commit graph: commits stored as JSON records keyed by their own digest."""

    def __init__(self, logs_dir: Path):
        self.logs_dir = Path(logs_dir)

    def _path(self, digest: str) -> Path:
        return self.logs_dir / digest

    def create_root(self) -> Commit:
        """Create and save the initial commit."""
        commit = Commit.root()
        self.save(commit)
        return commit

    def create(self, message: str, parent: Commit, additions: Mapping[str, str],
               removals: Iterable[str], second_parent: Optional[Commit] = None) -> Commit:
        """Build a commit from ``parent``'s snapshot with the staged changes applied.

        The commit is not saved; call :meth:`save` once the caller is ready to
        persist it.
        """
        if not message or not message.strip():
            raise MissingCommitMessage("Please enter a commit message.")
        removals = set(removals)
        if not additions and not removals:
            raise EmptyCommit("No changes added to the commit.")

        files = dict(parent.files)
        files.update(additions)
        for path in removals:
            files.pop(path, None)

        return Commit(
            message=message,
            files=files,
            parent=parent.digest,
            second_parent=second_parent.digest if second_parent else NO_PARENT,
        )

    def save(self, commit: Commit) -> str:
        commit_file = self._path(commit.digest)
        if not commit_file.exists():
            atomic_write(commit_file, commit.serialize())
            logger.debug(f"Saved commit {commit.digest[:7]}")
        return commit.digest

    def exists(self, digest: str) -> bool:
        return len(digest) == DIGEST_LENGTH and self._path(digest).is_file()

    def all_digests(self) -> List[str]:
        if not self.logs_dir.is_dir():
            return []
        return sorted(
            p.name for p in self.logs_dir.iterdir()
            if p.is_file() and not p.name.endswith('.tmp')
        )

    def resolve(self, commit_id: str) -> str:
        """Resolve a full or abbreviated commit id to a full digest."""
        if self.exists(commit_id):
            return commit_id
        matches = [d for d in self.all_digests() if commit_id and d.startswith(commit_id)]
        if not matches:
            raise CommitNotFound("No commit with that id exists.")
        if len(matches) > 1:
            raise AmbiguousCommitId(commit_id, matches)
        return matches[0]

    def read(self, commit_id: str) -> Commit:
        digest = self.resolve(commit_id)
        with open(self._path(digest), 'rb') as f:
            return Commit.from_content(f.read(), expected_digest=digest)

    def iter_commits(self) -> Iterator[Commit]:
        for digest in self.all_digests():
            yield self.read(digest)

    def first_parent_chain(self, digest: str) -> Iterator[Commit]:
        """Walk from ``digest`` back to the root along first parents."""
        while digest:
            commit = self.read(digest)
            yield commit
            digest = commit.parent

    def find(self, message: str) -> List[str]:
        """Digests of every commit whose message is exactly ``message``."""
        found = [c.digest for c in self.iter_commits() if c.message == message]
        if not found:
            raise CommitNotFound("Found no commit with that message.")
        return found

