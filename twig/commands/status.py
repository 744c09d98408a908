"""
Status command implementation.
"""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any, Iterable, List
from .base import BaseCommand
from ..core.repository import StatusReport

def _section(title: str, entries: Iterable[str]) -> List[str]:
    return [f"=== {title} ===", *entries, ""]

def format_status(report: StatusReport) -> str:
    branches = [
        f"*{name}" if name == report.current_branch else name
        for name in report.branches
    ]
    modifications = [
        f"{path} ({kind})" for path, kind in sorted(report.modifications.items())
    ]
    lines = (
        _section("Branches", branches)
        + _section("Staged Files", report.staged)
        + _section("Removed Files", report.removed)
        + _section("Modifications Not Staged For Commit", modifications)
        + _section("Untracked Files", report.untracked)
    )
    return "\n".join(lines)

class StatusCommand(BaseCommand):
    """Show repository status."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        """Register status command parser."""
        parser = subparsers.add_parser(
            "status",
            help="Show repository status"
        )
        return parser

    def execute_from_args(self, args: Any) -> None:
        """Execute status command from parsed arguments."""
        self.execute()

    def execute(self) -> None:
        """Show repository status."""
        print(format_status(self.repo.status()))
