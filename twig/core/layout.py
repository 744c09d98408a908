"""
On-disk layout of a repository directory.
"""
from pathlib import Path
from .refs import BranchRegistry
from .store import CommitStore, ObjectStore

REPO_DIR_NAME = ".twig"

class Layout:
    """Paths inside one ``.twig`` directory.

    ::

        .twig
          |--objects   blob contents, named by digest
          |--logs      commit records, named by digest
          |--branches  branch histories
          |--remote    paths to other repositories
          |--HEAD      active branch name
          |--stage     staging area
          |--config    repository configuration
    """

    def __init__(self, twig_dir: Path):
        self.twig_dir = Path(twig_dir)
        self.objects_dir = self.twig_dir / "objects"
        self.logs_dir = self.twig_dir / "logs"
        self.branches_dir = self.twig_dir / "branches"
        self.remote_dir = self.twig_dir / "remote"
        self.head_file = self.twig_dir / "HEAD"
        self.stage_file = self.twig_dir / "stage"
        self.config_file = self.twig_dir / "config"

    def exists(self) -> bool:
        return self.twig_dir.is_dir() and self.head_file.is_file()

    def create_dirs(self) -> None:
        for directory in (self.twig_dir, self.objects_dir, self.logs_dir,
                          self.branches_dir, self.remote_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def object_store(self) -> ObjectStore:
        return ObjectStore(self.objects_dir)

    def commit_store(self) -> CommitStore:
        return CommitStore(self.logs_dir)

    def branch_registry(self) -> BranchRegistry:
        return BranchRegistry(self.branches_dir, self.head_file)
