"""Tests for remotes: registration, push, fetch and pull."""

import pytest

from twig import MergeOutcome
from twig.exceptions import (
    NeedsPull, NoSuchRemote, RemoteBranchNotFound, RemoteExists, RemoteNotFound
)


@pytest.fixture
def origin(repo, other_repo):
    repo.add_remote("origin", str(other_repo.twig_dir))
    return other_repo


class TestRemoteRegistry:
    def test_add_and_remove(self, repo, other_repo):
        repo.add_remote("origin", str(other_repo.twig_dir))
        assert repo.remotes.names() == ["origin"]
        assert repo.remotes.path("origin") == other_repo.twig_dir
        repo.rm_remote("origin")
        assert repo.remotes.names() == []

    def test_add_duplicate(self, repo, origin):
        with pytest.raises(RemoteExists):
            repo.add_remote("origin", "elsewhere")

    def test_remove_unknown(self, repo):
        with pytest.raises(NoSuchRemote):
            repo.rm_remote("origin")

    def test_relative_path_from_working_root(self, repo, other_repo):
        repo.add_remote("origin", "../remote/.twig")
        assert repo.remotes.path("origin").resolve() == other_repo.twig_dir

    def test_missing_remote_directory(self, repo):
        repo.add_remote("gone", "../nowhere/.twig")
        with pytest.raises(RemoteNotFound):
            repo.push("gone", "master")
        with pytest.raises(RemoteNotFound):
            repo.fetch("gone", "master")


class TestPush:
    def test_push_appends_new_commits(self, repo, origin, commit_file):
        first = commit_file("a.txt", "a")
        second = commit_file("b.txt", "b")
        assert repo.push("origin", "master") == 2

        assert origin.branches.history("master") == repo.branches.history("master")
        assert origin.commits.read(second.digest) == second
        assert origin.objects.exists(first.files["a.txt"])
        # the remote working tree and HEAD are untouched
        assert not (origin.repo_path / "a.txt").exists()
        assert origin.branches.head() == "master"

    def test_push_new_branch(self, repo, origin, commit_file):
        commit_file("a.txt", "a")
        repo.push("origin", "feature")
        assert origin.branches.history("feature") == repo.branches.history("master")

    def test_push_nothing_new(self, repo, origin):
        assert repo.push("origin", "master") == 0

    def test_push_needs_pull(self, repo, origin, commit_file):
        commit_file("remote.txt", "r", target=origin)
        commit_file("local.txt", "l")
        with pytest.raises(NeedsPull):
            repo.push("origin", "master")


class TestFetch:
    def test_fetch_creates_tracking_branch(self, repo, origin, commit_file):
        remote_commit = commit_file("a.txt", "from remote", target=origin)
        assert repo.fetch("origin", "master") == "origin/master"

        assert repo.branches.history("origin/master") == origin.branches.history("master")
        assert repo.commits.read(remote_commit.digest) == remote_commit
        assert repo.objects.get(remote_commit.files["a.txt"]) == b"from remote"
        # local branch and working tree untouched
        assert repo.current_branch() == "master"
        assert not (repo.repo_path / "a.txt").exists()

    def test_fetch_updates_existing_tracking_branch(self, repo, origin, commit_file):
        commit_file("a.txt", "one", target=origin)
        repo.fetch("origin", "master")
        newer = commit_file("a.txt", "two", target=origin)
        repo.fetch("origin", "master")
        assert repo.branches.tip("origin/master") == newer.digest

    def test_fetch_unknown_branch(self, repo, origin):
        with pytest.raises(RemoteBranchNotFound):
            repo.fetch("origin", "ghost")


class TestPull:
    def test_pull_fast_forwards(self, repo, origin, read, commit_file):
        remote_commit = commit_file("a.txt", "from remote", target=origin)
        result = repo.pull("origin", "master")
        assert result.outcome is MergeOutcome.FAST_FORWARD
        assert repo.branches.tip("master") == remote_commit.digest
        assert read("a.txt") == "from remote"

    def test_pull_merges_divergent_history(self, repo, origin, read, commit_file):
        commit_file("a.txt", "from remote", target=origin)
        commit_file("b.txt", "local")
        result = repo.pull("origin", "master")

        assert result.outcome is MergeOutcome.MERGED
        merge_commit = repo.commits.read(result.commit)
        assert merge_commit.message == "Merged origin/master into master."
        assert read("a.txt") == "from remote"
        assert read("b.txt") == "local"
