"""
Main repository implementation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from loguru import logger
from ..config import RepoConfig
from ..exceptions import AlreadyInitialized, NotInitialized, UserInputError
from .index import Stage
from .layout import Layout, REPO_DIR_NAME
from .merge import MergeEngine, MergeResult
from .objects import Commit
from .remote import Endpoint, RemoteRegistry, RemoteSync
from .worktree import WorkingTree

@dataclass
class StatusReport:
    """Everything ``twig status`` shows."""

    current_branch: str
    branches: List[str]
    staged: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modifications: Dict[str, str] = field(default_factory=dict)
    untracked: List[str] = field(default_factory=list)

class Twig:
    """Main twig repository class.

    One instance is a handle on a working tree and its ``.twig`` directory;
    every operation reads the state it needs from disk and writes back what
    it changed before returning.
    """

    def __init__(self, repo_path: str = "."):
        self.repo_path = Path(repo_path).resolve()
        self.layout = Layout(self.repo_path / REPO_DIR_NAME)
        self.twig_dir = self.layout.twig_dir

        self.objects = self.layout.object_store()
        self.commits = self.layout.commit_store()
        self.branches = self.layout.branch_registry()
        self.stage = Stage(self.layout.stage_file, self.repo_path, self.objects)
        self.worktree = WorkingTree(
            self.repo_path, self.twig_dir, self.objects, self.commits,
            self.branches, self.stage,
        )
        self.merger = MergeEngine(
            self.objects, self.commits, self.branches, self.stage, self.worktree
        )
        self.remotes = RemoteRegistry(self.layout.remote_dir, self.repo_path)
        self.sync = RemoteSync(
            Endpoint(self.objects, self.commits, self.branches), self.remotes
        )

    @property
    def config(self) -> RepoConfig:
        return RepoConfig.load(self.layout.config_file)

    def _ensure_repo_exists(self):
        """Check if repository exists and raise error if not."""
        if not self.layout.exists():
            raise NotInitialized("Not in an initialized twig directory.")

    def _normalize_path(self, file_path: str) -> str:
        """Normalize a file path to a POSIX path relative to the working root."""
        abs_path = (self.repo_path / Path(file_path)).resolve()
        try:
            return abs_path.relative_to(self.repo_path).as_posix()
        except ValueError:
            raise UserInputError(f"{file_path} is outside the working tree.")

    def head_commit(self) -> Commit:
        return self.worktree.head_commit()

    def current_branch(self) -> str:
        self._ensure_repo_exists()
        return self.branches.head()

    def init(self, initial_branch: Optional[str] = None) -> Commit:
        """Initialize a new repository with a root commit on the initial branch."""
        if self.layout.exists():
            raise AlreadyInitialized(
                "A twig version-control system already exists in the current directory."
            )
        self.layout.create_dirs()
        config = RepoConfig.default(initial_branch) if initial_branch else RepoConfig.default()
        config.save(self.layout.config_file)
        self.stage.clear()

        root = self.commits.create_root()
        branch = config.default_branch
        self.branches.create_initial(branch, root.digest)
        self.branches.set_head(branch)
        logger.info(f"Initialized empty twig repository in {self.twig_dir}")
        return root

    def add(self, file_path: str) -> bool:
        """Stage a file; returns False when it matches HEAD and nothing was staged."""
        self._ensure_repo_exists()
        return self.stage.stage_add(self._normalize_path(file_path), self.head_commit())

    def rm(self, file_path: str) -> None:
        self._ensure_repo_exists()
        self.stage.stage_remove(self._normalize_path(file_path), self.head_commit())

    def commit(self, message: str) -> Commit:
        """Create a new commit with staged changes."""
        self._ensure_repo_exists()
        branch = self.branches.head()
        commit = self.commits.create(
            message, self.head_commit(), self.stage.additions, self.stage.removals
        )
        self.commits.save(commit)
        self.branches.append(branch, commit.digest)
        self.stage.clear()
        logger.info(f"[{branch} {commit.digest[:7]}] {message}")
        return commit

    def log(self) -> List[Commit]:
        """Commits from the HEAD tip back to the root along first parents."""
        self._ensure_repo_exists()
        return list(self.commits.first_parent_chain(self.branches.tip(self.branches.head())))

    def global_log(self) -> List[Commit]:
        self._ensure_repo_exists()
        return list(self.commits.iter_commits())

    def find(self, message: str) -> List[str]:
        self._ensure_repo_exists()
        return self.commits.find(message)

    def status(self) -> StatusReport:
        """Show repository status."""
        self._ensure_repo_exists()
        head = self.head_commit()
        additions, removals = self.stage.additions, self.stage.removals
        untracked = [
            path for path in self.worktree.files()
            if (path not in head.files and path not in additions) or path in removals
        ]
        return StatusReport(
            current_branch=self.branches.head(),
            branches=self.branches.names(),
            staged=sorted(additions),
            removed=sorted(removals),
            modifications=dict(sorted(self.worktree.modified_files(head).items())),
            untracked=sorted(untracked),
        )

    def branch(self, name: str) -> None:
        self._ensure_repo_exists()
        self.branches.create(name)

    def rm_branch(self, name: str) -> None:
        self._ensure_repo_exists()
        self.branches.delete(name)

    def checkout_branch(self, name: str) -> Commit:
        self._ensure_repo_exists()
        return self.worktree.checkout_branch(name)

    def checkout_file(self, file_path: str, commit_id: Optional[str] = None) -> None:
        self._ensure_repo_exists()
        self.worktree.checkout_file(self._normalize_path(file_path), commit_id)

    def reset(self, commit_id: str) -> Commit:
        self._ensure_repo_exists()
        return self.worktree.reset(commit_id)

    def merge(self, branch: str) -> MergeResult:
        self._ensure_repo_exists()
        return self.merger.merge(branch)

    def add_remote(self, name: str, directory: str) -> None:
        self._ensure_repo_exists()
        self.remotes.add(name, directory)

    def rm_remote(self, name: str) -> None:
        self._ensure_repo_exists()
        self.remotes.remove(name)

    def push(self, remote: str, branch: str) -> int:
        self._ensure_repo_exists()
        return self.sync.push(remote, branch)

    def fetch(self, remote: str, branch: str) -> str:
        self._ensure_repo_exists()
        return self.sync.fetch(remote, branch)

    def pull(self, remote: str, branch: str) -> MergeResult:
        """Fetch ``branch`` from ``remote`` and merge the tracking branch into HEAD."""
        self._ensure_repo_exists()
        tracking_branch = self.sync.fetch(remote, branch)
        return self.merger.merge(tracking_branch)
