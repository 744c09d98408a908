"""Merge command implementation."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand
from ..core.merge import MergeOutcome, MergeResult

def report_merge(result: MergeResult) -> None:
    if result.outcome is MergeOutcome.FAST_FORWARD:
        print("Current branch fast-forwarded.")
    elif result.has_conflicts:
        print("Encountered a merge conflict.")

class MergeCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('merge', help='Merge a branch into the current branch')
        parser.add_argument('branch', help='Branch to merge')
        return parser

    def execute_from_args(self, args: Any):
        report_merge(self.repo.merge(args.branch))
