"""Shared fixtures: freshly initialised repositories under tmp_path."""

from pathlib import Path

import pytest

from twig import Twig


def _init(root: Path) -> Twig:
    root.mkdir(parents=True, exist_ok=True)
    repo = Twig(str(root))
    repo.init()
    return repo


@pytest.fixture
def repo(tmp_path):
    return _init(tmp_path / "work")


@pytest.fixture
def other_repo(tmp_path):
    """A second repository, used as a remote."""
    return _init(tmp_path / "remote")


@pytest.fixture
def write(repo):
    def _write(name, content, target=None):
        root = (target or repo).repo_path
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def read(repo):
    def _read(name, target=None):
        path = (target or repo).repo_path / name
        return path.read_text() if path.exists() else None

    return _read


@pytest.fixture
def commit_file(repo, write):
    """Write, stage and commit one file; returns the new commit."""

    def _commit_file(name, content, message=None, target=None):
        target = target or repo
        write(name, content, target=target)
        target.add(name)
        return target.commit(message or f"write {name}")

    return _commit_file
