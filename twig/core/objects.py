"""
Object implementations (blob, commit).
"""
import json
import hashlib
import time
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Any
from ..exceptions import IntegrityError, ObjectError

INITIAL_COMMIT_MESSAGE = "initial commit"
NO_PARENT = ""

def hash_content(content: bytes) -> str:
    """Generate SHA-1 hash for content."""
    return hashlib.sha1(content).hexdigest()

def format_timestamp(timestamp: int, tz=timezone.utc) -> str:
    """Format an epoch timestamp like ``Thu Jan 1 00:00:00 1970 +0000``.

    Pass ``tz=None`` for the local timezone.
    """
    if tz is None:
        dt = datetime.fromtimestamp(timestamp).astimezone()
    else:
        dt = datetime.fromtimestamp(timestamp, tz)
    return f"{dt:%a %b} {dt.day} {dt:%H:%M:%S %Y %z}"

class Blob:
    """Represents a file blob object."""

    def __init__(self, content: bytes):
        self.content = content
        self._hash = None

    @property
    def hash(self) -> str:
        """Get the SHA-1 hash of this blob."""
        if self._hash is None:
            self._hash = hash_content(self.content)
        return self._hash

    @classmethod
    def from_file(cls, file_path: Path) -> 'Blob':
        """Create a blob from a file."""
        try:
            with open(file_path, 'rb') as f:
                content = f.read()
            return cls(content)
        except (IOError, OSError) as e:
            raise ObjectError(f"Failed to read file {file_path}: {e}")

class Commit:
    """Represents an immutable commit.

    Ancestry is recorded only as parent digests; parents are read back from
    the commit store on demand.
    """

    def __init__(self, message: str, files: Mapping[str, str], parent: str = NO_PARENT,
                 second_parent: str = NO_PARENT, timestamp: Optional[int] = None):
        self._message = message
        self._files = MappingProxyType(dict(files))
        self._parent = parent or NO_PARENT
        self._second_parent = second_parent or NO_PARENT
        self._timestamp = int(time.time()) if timestamp is None else int(timestamp)
        self._digest = self._compute_digest()

    @property
    def message(self) -> str:
        return self._message

    @property
    def files(self) -> Mapping[str, str]:
        """Read-only mapping of path to blob digest."""
        return self._files

    @property
    def parent(self) -> str:
        return self._parent

    @property
    def second_parent(self) -> str:
        return self._second_parent

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def digest(self) -> str:
        return self._digest

    @property
    def is_merge(self) -> bool:
        return self._second_parent != NO_PARENT

    @property
    def date(self) -> str:
        """Commit time in the local timezone."""
        return format_timestamp(self._timestamp, tz=None)

    def _compute_digest(self) -> str:
        """Hash the formatted time, message, parents and canonical file mapping."""
        sha = hashlib.sha1()
        for part in (format_timestamp(self._timestamp), self._message,
                     self._parent, self._second_parent,
                     json.dumps(dict(self._files), sort_keys=True)):
            sha.update(part.encode())
            sha.update(b"\0")
        return sha.hexdigest()

    def to_dict(self) -> Dict[str, Any]:
        """Convert commit to dictionary."""
        return {
            "timestamp": self._timestamp,
            "message": self._message,
            "parent": self._parent,
            "second_parent": self._second_parent,
            "files": dict(self._files),
        }

    def serialize(self) -> bytes:
        """Serialize commit data."""
        return json.dumps(self.to_dict(), indent=2, sort_keys=True).encode()

    @classmethod
    def from_content(cls, content: bytes, expected_digest: Optional[str] = None) -> 'Commit':
        """Create a commit from serialized content."""
        try:
            data = json.loads(content.decode())
            commit = cls(
                message=data["message"],
                files=data.get("files", {}),
                parent=data.get("parent", NO_PARENT),
                second_parent=data.get("second_parent", NO_PARENT),
                timestamp=data["timestamp"],
            )
        except (UnicodeDecodeError, json.JSONDecodeError, KeyError) as e:
            raise IntegrityError(f"Invalid commit format: {e}")

        if expected_digest is not None and commit.digest != expected_digest:
            raise IntegrityError(
                f"Commit {expected_digest} hashes to {commit.digest}"
            )
        return commit

    @classmethod
    def root(cls) -> 'Commit':
        """The initial commit every repository starts from."""
        return cls(INITIAL_COMMIT_MESSAGE, {}, timestamp=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._digest)

    def __repr__(self) -> str:
        return f"Commit({self._digest[:7]}, {self._message!r})"
