"""Find command implementation."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand

class FindCommand(BaseCommand):
    """Print the ids of all commits with a given message."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('find', help='Find commits by message')
        parser.add_argument('message', help='Exact commit message')
        return parser

    def execute_from_args(self, args: Any) -> None:
        for digest in self.repo.find(args.message):
            print(digest)
