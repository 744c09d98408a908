"""
Remotes: other repositories on the local filesystem, and push/fetch against them.
"""
import os
from pathlib import Path
from typing import Iterable, List
from loguru import logger
from ..exceptions import (
    NeedsPull, NoSuchRemote, RemoteBranchNotFound, RemoteExists, RemoteNotFound
)
from .layout import Layout
from .refs import BranchRegistry
from .store import CommitStore, ObjectStore, atomic_write

class RemoteRegistry:
    """Named paths to other repositories' ``.twig`` directories."""

    def __init__(self, remote_dir: Path, work_root: Path):
        self.remote_dir = Path(remote_dir)
        self.work_root = Path(work_root)

    def names(self) -> List[str]:
        if not self.remote_dir.is_dir():
            return []
        return sorted(
            p.name for p in self.remote_dir.iterdir()
            if p.is_file() and not p.name.endswith('.tmp')
        )

    def add(self, name: str, directory: str) -> None:
        if name in self.names():
            raise RemoteExists("A remote with that name already exists.")
        remote_path = directory.replace("/", os.sep)
        atomic_write(self.remote_dir / name, remote_path.encode())
        logger.info(f"Added remote {name} -> {remote_path}")

    def remove(self, name: str) -> None:
        if name not in self.names():
            raise NoSuchRemote("A remote with that name does not exist.")
        (self.remote_dir / name).unlink()
        logger.info(f"Removed remote {name}")

    def path(self, name: str) -> Path:
        """The remote's ``.twig`` directory; relative paths are taken from the working root."""
        if name not in self.names():
            raise NoSuchRemote("A remote with that name does not exist.")
        with open(self.remote_dir / name, 'r', encoding='utf-8') as f:
            stored = Path(f.read().strip())
        return stored if stored.is_absolute() else (self.work_root / stored)

class Endpoint:
    """The object store, commit graph and branches of one repository."""

    def __init__(self, objects: ObjectStore, commits: CommitStore, branches: BranchRegistry):
        self.objects = objects
        self.commits = commits
        self.branches = branches

    @classmethod
    def open(cls, twig_dir: Path) -> 'Endpoint':
        layout = Layout(twig_dir)
        if not layout.twig_dir.is_dir():
            raise RemoteNotFound("Remote directory not found.")
        return cls(layout.object_store(), layout.commit_store(), layout.branch_registry())

def copy_commits(source: Endpoint, target: Endpoint, digests: Iterable[str]) -> int:
    """Copy commits missing from ``target``, blobs first. Returns the number copied."""
    copied = 0
    for digest in digests:
        if target.commits.exists(digest):
            continue
        commit = source.commits.read(digest)
        for blob_hash in commit.files.values():
            source.objects.copy_to(target.objects, blob_hash)
        target.commits.save(commit)
        copied += 1
    return copied

class RemoteSync:
    """Push and fetch between the local repository and its remotes."""

    def __init__(self, local: Endpoint, remotes: RemoteRegistry):
        self.local = local
        self.remotes = remotes

    def _open(self, remote_name: str) -> Endpoint:
        return Endpoint.open(self.remotes.path(remote_name))

    def push(self, remote_name: str, remote_branch: str) -> int:
        """Append the local branch's new commits to ``remote_branch``.

        Returns the number of commits appended to the remote branch.
        """
        remote = self._open(remote_name)
        local_history = self.local.branches.history(self.local.branches.head())

        if not remote.branches.exists(remote_branch):
            copy_commits(self.local, remote, local_history)
            remote.branches.set_history(remote_branch, local_history)
            logger.info(f"Pushed new branch {remote_branch} to {remote_name}")
            return len(local_history)

        remote_tip = remote.branches.tip(remote_branch)
        if remote_tip not in local_history:
            raise NeedsPull("Please pull down remote changes before pushing.")

        # Commits strictly after the remote tip, oldest first
        new_commits = list(reversed(local_history[:local_history.index(remote_tip)]))
        copy_commits(self.local, remote, new_commits)
        for digest in new_commits:
            remote.branches.append(remote_branch, digest)
        logger.info(f"Pushed {len(new_commits)} commits to {remote_name}/{remote_branch}")
        return len(new_commits)

    def fetch(self, remote_name: str, remote_branch: str) -> str:
        """Copy ``remote_branch`` into the local branch ``<remote>/<branch>`` and return its name."""
        remote = self._open(remote_name)
        if not remote.branches.exists(remote_branch):
            raise RemoteBranchNotFound("That remote does not have that branch.")

        history = remote.branches.history(remote_branch)
        copied = copy_commits(remote, self.local, history)
        tracking_branch = f"{remote_name}/{remote_branch}"
        self.local.branches.set_history(tracking_branch, history)
        logger.info(f"Fetched {copied} new commits into {tracking_branch}")
        return tracking_branch
