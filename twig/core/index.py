"""
Index (staging area) management with a JSON format.
"""
import json
from pathlib import Path
from typing import Dict, Set
from loguru import logger
from ..exceptions import IntegrityError, NothingToRemove, WorkingFileNotFound
from .objects import Blob, Commit
from .store import ObjectStore, atomic_write

class Stage:
    """Pending additions and removals for the next commit.

    The whole stage file is read on construction and written back after
    every mutation. A path is never staged for addition and removal at once.
    """

    def __init__(self, stage_file: Path, work_root: Path, objects: ObjectStore):
        self.stage_file = Path(stage_file)
        self.work_root = Path(work_root)
        self.objects = objects
        self.additions: Dict[str, str] = {}
        self.removals: Set[str] = set()
        self.load()

    def load(self) -> None:
        """Load the stage from its JSON file."""
        if not self.stage_file.exists():
            self.additions, self.removals = {}, set()
            return

        try:
            with open(self.stage_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            raise IntegrityError(f"Failed to read staging area: {e}")
        self.additions = dict(data.get("additions", {}))
        self.removals = set(data.get("removals", []))

    def save(self) -> None:
        """Save the stage to its JSON file."""
        data = {
            "additions": self.additions,
            "removals": sorted(self.removals),
        }
        atomic_write(self.stage_file, json.dumps(data, indent=2).encode())

    def is_empty(self) -> bool:
        return not self.additions and not self.removals

    def stage_add(self, path: str, head: Commit) -> bool:
        """Stage the working copy of ``path``.

        Returns True when the file was staged, False when the working copy
        matches ``head`` and any pending entry was dropped instead.
        """
        full_path = self.work_root / path
        if not full_path.is_file():
            raise WorkingFileNotFound("File does not exist.")

        blob = Blob.from_file(full_path)
        staged = head.files.get(path) != blob.hash
        if staged:
            blob_hash = self.objects.put(blob.content)
            self.additions[path] = blob_hash
            logger.debug(f"Staged {path} as {blob_hash[:7]}")
        else:
            self.additions.pop(path, None)
            logger.debug(f"{path} matches HEAD; nothing to stage")
        self.removals.discard(path)
        self.save()
        return staged

    def stage_remove(self, path: str, head: Commit) -> None:
        """Unstage ``path``, and if ``head`` tracks it, stage its removal and delete it."""
        staged = path in self.additions
        tracked = path in head.files
        if not staged and not tracked:
            raise NothingToRemove("No reason to remove the file.")

        if staged:
            del self.additions[path]
        if tracked:
            self.removals.add(path)
            working_file = self.work_root / path
            if working_file.is_file():
                working_file.unlink()
        logger.debug(f"Removed {path} (staged={staged}, tracked={tracked})")
        self.save()

    def stage_file_contents(self, path: str, blob_hash: str) -> None:
        """Record an addition whose blob is already stored (used by merge)."""
        self.additions[path] = blob_hash
        self.removals.discard(path)

    def stage_removal(self, path: str) -> None:
        """Record a removal without touching the working tree (used by merge)."""
        self.additions.pop(path, None)
        self.removals.add(path)

    def clear(self) -> None:
        self.additions.clear()
        self.removals.clear()
        self.save()
