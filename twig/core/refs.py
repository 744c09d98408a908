"""
Branch and HEAD management.
"""
import json
from pathlib import Path
from typing import List
from urllib.parse import quote, unquote
from loguru import logger
from ..exceptions import (
    BranchExists, CannotRemoveCurrentBranch, IntegrityError, NoSuchBranch,
    NotInitialized
)
from .store import atomic_write

class BranchRegistry:
    """Named commit histories plus the HEAD pointer naming the active one.

    Each branch file holds the branch's commit digests, tip first. Names may
    contain ``/`` (remote tracking branches); file names are the
    percent-encoded branch names.
    """

    def __init__(self, branches_dir: Path, head_file: Path):
        self.branches_dir = Path(branches_dir)
        self.head_file = Path(head_file)

    @staticmethod
    def _file_name(name: str) -> str:
        return quote(name, safe="")

    def _path(self, name: str) -> Path:
        return self.branches_dir / self._file_name(name)

    def _write(self, name: str, history: List[str]) -> None:
        atomic_write(self._path(name), json.dumps(history, indent=2).encode())

    def exists(self, name: str) -> bool:
        return self._path(name).is_file()

    def names(self) -> List[str]:
        if not self.branches_dir.is_dir():
            return []
        return sorted(
            unquote(p.name) for p in self.branches_dir.iterdir()
            if p.is_file() and not p.name.endswith('.tmp')
        )

    def history(self, name: str) -> List[str]:
        """The branch's commit digests, most recent first."""
        branch_file = self._path(name)
        if not branch_file.is_file():
            raise NoSuchBranch("A branch with that name does not exist.")
        try:
            with open(branch_file, 'r', encoding='utf-8') as f:
                history = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            raise IntegrityError(f"Failed to read branch {name}: {e}")
        if not history:
            raise IntegrityError(f"Branch {name} has no commits")
        return history

    def tip(self, name: str) -> str:
        return self.history(name)[0]
    def create(self, name: str) -> List[str]:
        """Create ``name`` with a copy of the active branch's history."""
        if self.exists(name):
            raise BranchExists("A branch with that name already exists.")
        history = list(self.history(self.head()))
        self._write(name, history)
        logger.info(f"Created branch {name} at {history[0][:7]}")
        return history

    def create_initial(self, name: str, root_digest: str) -> None:
        self._write(name, [root_digest])

    def append(self, name: str, digest: str) -> None:
        """Make ``digest`` the new tip of ``name``."""
        history = self.history(name)
        history.insert(0, digest)
        self._write(name, history)
        logger.info(f"Branch {name} now at {digest[:7]}")

    def set_history(self, name: str, history: List[str]) -> None:
        """Replace (or create) a branch's whole history."""
        if not history:
            raise IntegrityError(f"Refusing to write empty history for {name}")
        self._write(name, list(history))
        logger.info(f"Branch {name} set to {history[0][:7]}")

    def delete(self, name: str) -> None:
        """Delete the pointer only; commits stay in the store."""
        if not self.exists(name):
            raise NoSuchBranch("A branch with that name does not exist.")
        if name == self.head():
            raise CannotRemoveCurrentBranch("Cannot remove the current branch.")
        self._path(name).unlink()
        logger.info(f"Deleted branch {name}")

    def head(self) -> str:
        """Get current branch name."""
        if not self.head_file.is_file():
            raise NotInitialized("Not in an initialized twig directory.")
        with open(self.head_file, 'r', encoding='utf-8') as f:
            return f.read().strip()

    def set_head(self, name: str) -> None:
        atomic_write(self.head_file, name.encode())
        logger.debug(f"HEAD -> {name}")
