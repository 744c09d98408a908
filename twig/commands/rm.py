"""Remove command implementation."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand

class RmCommand(BaseCommand):
    """Unstage a file, or stage its removal and delete it if it is tracked."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('rm', help='Remove a file from the working tree and the next commit')
        parser.add_argument('file', help='File to remove')
        return parser

    def execute_from_args(self, args: Any):
        self.repo.rm(args.file)
