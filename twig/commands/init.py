"""
Init command implementation.
"""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any, Optional
from .base import BaseCommand

class InitCommand(BaseCommand):
    """Initialize a new twig repository."""

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        """Register init command parser."""
        parser = subparsers.add_parser(
            "init",
            help="Initialize a new repository"
        )
        parser.add_argument(
            "-b", "--initial-branch",
            help="Name of the initial branch (default: master)"
        )
        return parser

    def execute_from_args(self, args: Any) -> None:
        """Execute init command from parsed arguments."""
        self.execute(args.initial_branch)

    def execute(self, initial_branch: Optional[str] = None) -> None:
        """Initialize a new repository."""
        self.repo.init(initial_branch)
        print(f"Initialized empty twig repository in {self.repo.twig_dir}")
