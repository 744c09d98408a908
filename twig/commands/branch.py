"""Branch and rm-branch command implementations."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand

class BranchCommand(BaseCommand):
    """Create a branch at the current commit."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        """Register branch command parser."""
        parser = subparsers.add_parser('branch', help='Create a branch')
        parser.add_argument("name", help="Branch name to create")
        return parser

    def execute_from_args(self, args: Any) -> None:
        """Execute branch command from parsed arguments."""
        self.repo.branch(args.name)

class RmBranchCommand(BaseCommand):
    """Delete a branch pointer."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('rm-branch', help='Delete a branch')
        parser.add_argument("name", help="Branch name to delete")
        return parser

    def execute_from_args(self, args: Any) -> None:
        self.repo.rm_branch(args.name)
