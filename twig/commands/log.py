"""Log and global-log command implementations."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any, Iterable
from .base import BaseCommand
from ..core.objects import Commit

def format_commit(commit: Commit) -> str:
    """One commit block as shown by ``log`` and ``global-log``."""
    lines = ["===", f"commit {commit.digest}"]
    if commit.is_merge:
        lines.append(f"Merge: {commit.parent[:7]} {commit.second_parent[:7]}")
    lines.append(f"Date: {commit.date}")
    lines.append(commit.message)
    return "\n".join(lines) + "\n"

def print_commits(commits: Iterable[Commit]) -> None:
    for commit in commits:
        print(format_commit(commit))

class LogCommand(BaseCommand):
    """Show the history of the current branch."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        """Register log command parser."""
        return subparsers.add_parser('log', help='Show commit history of the current branch')

    def execute_from_args(self, args: Any) -> None:
        """Execute log command from parsed arguments."""
        print_commits(self.repo.log())

class GlobalLogCommand(BaseCommand):
    """Show every commit ever made."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        return subparsers.add_parser('global-log', help='Show all commits in the repository')

    def execute_from_args(self, args: Any) -> None:
        print_commits(self.repo.global_log())
