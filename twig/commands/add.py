"""
Add command implementation.
"""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand

class AddCommand(BaseCommand):
    """Add a file to the staging area."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        """Register add command parser."""
        parser = subparsers.add_parser(
            "add",
            help="Add a file to staging area"
        )
        parser.add_argument(
            "file",
            help="File to add"
        )
        return parser

    def execute_from_args(self, args: Any) -> None:
        """Execute add command from parsed arguments."""
        self.execute(args.file)

    def execute(self, file: str) -> None:
        """Add a file to the staging area."""
        self.repo.add(file)
