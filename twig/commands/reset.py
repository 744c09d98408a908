"""Reset command implementation."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand

class ResetCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('reset', help='Reset the working tree and current branch to a commit')
        parser.add_argument('commit', help='Commit to reset to (abbreviated ids allowed)')
        return parser

    def execute_from_args(self, args: Any):
        self.repo.reset(args.commit)
