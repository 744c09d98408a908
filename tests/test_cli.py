"""End-to-end tests through the command line entry point."""

import pytest
from loguru import logger

from twig import Twig
from twig.cli import command_index, main
from twig.core.objects import Commit


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()
    logger.disable("twig")


@pytest.fixture
def run(repo, capsys):
    """Run a twig command against ``repo`` and return its stdout."""

    def _run(*argv):
        capsys.readouterr()
        main(["--repo", str(repo.repo_path), *argv])
        return capsys.readouterr().out

    return _run


@pytest.fixture
def fails(repo, capsys):
    """Run a command that must fail and return its error line."""

    def _fails(*argv):
        capsys.readouterr()
        with pytest.raises(SystemExit) as exc_info:
            main(["--repo", str(repo.repo_path), *argv])
        assert exc_info.value.code == 1
        return capsys.readouterr().out.strip()

    return _fails


class TestBasics:
    def test_init(self, tmp_path, capsys):
        main(["--repo", str(tmp_path), "init"])
        out = capsys.readouterr().out
        assert out.startswith("Initialized empty twig repository in")
        assert (tmp_path / ".twig" / "HEAD").is_file()

    def test_init_twice(self, fails):
        assert fails("init") == (
            "fatal: A twig version-control system already exists in the current directory."
        )

    def test_no_command(self, fails):
        assert fails() == "fatal: Please enter a command."

    def test_missing_operand(self, fails):
        assert fails("commit").startswith("fatal: Incorrect operands.")

    def test_not_initialized(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["--repo", str(tmp_path), "status"])
        assert capsys.readouterr().out.strip() == "fatal: Not in an initialized twig directory."

    def test_add_and_commit(self, repo, write, run):
        write("a.txt", "a")
        assert run("add", "a.txt") == ""
        out = run("commit", "first")
        digest = repo.branches.tip("master")
        assert out == f"[master {digest[:7]}] first\n"

    def test_commit_errors(self, write, run, fails):
        assert fails("commit", "nothing") == "fatal: No changes added to the commit."
        write("a.txt", "a")
        run("add", "a.txt")
        assert fails("commit", "") == "fatal: Please enter a commit message."

    def test_rm_without_reason(self, write, fails):
        write("a.txt", "a")
        assert fails("rm", "a.txt") == "fatal: No reason to remove the file."


class TestCommandPosition:
    def test_skips_options_and_their_values(self):
        assert command_index(["--repo", "checkout", "checkout", "--", "f"]) == 2
        assert command_index(["-v", "log"]) == 1
        assert command_index(["--verbose"]) is None

    def test_repo_named_checkout(self, tmp_path, monkeypatch):
        root = tmp_path / "checkout"
        root.mkdir()
        repo = Twig(str(root))
        repo.init()
        (root / "a.txt").write_text("committed")
        repo.add("a.txt")
        repo.commit("add a")
        (root / "a.txt").write_text("scratch")

        monkeypatch.chdir(tmp_path)
        main(["--repo", "checkout", "checkout", "--", "a.txt"])
        assert (root / "a.txt").read_text() == "committed"


class TestHistory:
    def test_log(self, repo, commit_file, run):
        commit = commit_file("a.txt", "a", message="first")
        blocks = run("log").split("\n\n")
        assert blocks[0].startswith(f"===\ncommit {commit.digest}\nDate: ")
        assert blocks[0].endswith("\nfirst")
        assert f"commit {Commit.root().digest}" in blocks[1]
        assert blocks[1].endswith("initial commit")

    def test_root_date_in_local_time(self, run):
        out = run("log")
        date_line = out.splitlines()[2]
        assert date_line == f"Date: {Commit.root().date}"

    def test_find(self, commit_file, run, fails):
        first = commit_file("a.txt", "a", message="same")
        second = commit_file("b.txt", "b", message="same")
        assert set(run("find", "same").split()) == {first.digest, second.digest}
        assert fails("find", "other") == "fatal: Found no commit with that message."

    def test_global_log_lists_every_commit(self, repo, commit_file, run):
        commit_file("a.txt", "a")
        assert run("global-log").count("===\n") == 2


class TestStatusOutput:
    def test_status(self, repo, write, commit_file, run):
        commit_file("tracked.txt", "t")
        run("branch", "other")
        write("new.txt", "n")
        run("add", "new.txt")
        write("tracked.txt", "changed")
        write("stray.txt", "?")

        assert run("status") == (
            "=== Branches ===\n"
            "*master\n"
            "other\n"
            "\n"
            "=== Staged Files ===\n"
            "new.txt\n"
            "\n"
            "=== Removed Files ===\n"
            "\n"
            "=== Modifications Not Staged For Commit ===\n"
            "tracked.txt (modified)\n"
            "\n"
            "=== Untracked Files ===\n"
            "stray.txt\n"
            "\n"
        )


class TestCheckoutAndBranches:
    def test_checkout_file_from_head(self, commit_file, write, read, run):
        commit_file("a.txt", "committed")
        write("a.txt", "scratch")
        run("checkout", "--", "a.txt")
        assert read("a.txt") == "committed"

    def test_checkout_file_from_abbreviated_commit(self, commit_file, read, run):
        old = commit_file("a.txt", "old")
        commit_file("a.txt", "new")
        run("checkout", old.digest[:8], "--", "a.txt")
        assert read("a.txt") == "old"

    def test_checkout_bad_operands(self, commit_file, fails):
        commit = commit_file("a.txt", "a")
        assert fails("checkout", commit.digest, "++", "a.txt") == "fatal: Incorrect operands."

    def test_checkout_branch(self, repo, commit_file, read, run, fails):
        run("branch", "other")
        commit_file("a.txt", "a")
        run("checkout", "other")
        assert repo.current_branch() == "other"
        assert read("a.txt") is None
        assert fails("checkout", "other") == "fatal: No need to checkout the current branch."
        assert fails("checkout", "ghost") == "fatal: No such branch exists."

    def test_rm_branch(self, repo, run, fails):
        run("branch", "other")
        assert fails("branch", "other") == "fatal: A branch with that name already exists."
        assert fails("rm-branch", "master") == "fatal: Cannot remove the current branch."
        run("rm-branch", "other")
        assert repo.branches.names() == ["master"]

    def test_reset(self, repo, commit_file, read, run):
        old = commit_file("a.txt", "old")
        commit_file("a.txt", "new")
        run("reset", old.digest[:6])
        assert read("a.txt") == "old"
        assert repo.branches.tip("master") == old.digest


class TestMergeOutput:
    def test_fast_forward(self, repo, commit_file, run):
        run("branch", "other")
        run("checkout", "other")
        commit_file("a.txt", "a")
        run("checkout", "master")
        assert run("merge", "other") == "Current branch fast-forwarded.\n"

    def test_conflict(self, repo, commit_file, read, run):
        commit_file("a.txt", "base\n")
        run("branch", "other")
        commit_file("a.txt", "master\n")
        run("checkout", "other")
        commit_file("a.txt", "other\n")
        run("checkout", "master")

        assert run("merge", "other") == "Encountered a merge conflict.\n"
        assert read("a.txt") == "<<<<<<< HEAD\nmaster\n=======\nother\n>>>>>>>\n"

    def test_merge_errors(self, repo, commit_file, write, run, fails):
        run("branch", "other")
        assert fails("merge", "master") == "fatal: Cannot merge a branch with itself."
        assert fails("merge", "ghost") == "fatal: A branch with that name does not exist."
        assert fails("merge", "other") == (
            "fatal: Given branch is an ancestor of the current branch."
        )
        write("a.txt", "a")
        run("add", "a.txt")
        assert fails("merge", "other") == "fatal: You have uncommitted changes."


class TestRemoteCommands:
    def test_push_and_fetch(self, repo, other_repo, commit_file, run):
        run("add-remote", "origin", str(other_repo.twig_dir))
        commit = commit_file("a.txt", "a")
        run("push", "origin", "master")
        assert other_repo.branches.tip("master") == commit.digest

        run("fetch", "origin", "master")
        assert repo.branches.tip("origin/master") == commit.digest

    def test_remote_errors(self, other_repo, run, fails):
        run("add-remote", "origin", str(other_repo.twig_dir))
        assert fails("add-remote", "origin", "x") == (
            "fatal: A remote with that name already exists."
        )
        assert fails("fetch", "origin", "ghost") == (
            "fatal: That remote does not have that branch."
        )
        run("rm-remote", "origin")
        assert fails("rm-remote", "origin") == (
            "fatal: A remote with that name does not exist."
        )

    def test_pull(self, other_repo, commit_file, read, run):
        run("add-remote", "origin", str(other_repo.twig_dir))
        commit_file("a.txt", "remote", target=other_repo)
        assert run("pull", "origin", "master") == "Current branch fast-forwarded.\n"
        assert read("a.txt") == "remote"
