"""Checkout command implementation."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any, List
from .base import BaseCommand
from ..exceptions import UserInputError

class CheckoutCommand(BaseCommand):
    """Switch branches or restore a working tree file.

    Accepted forms::

        checkout -- <file>
        checkout <commit> -- <file>
        checkout <branch>
    """

    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('checkout', help='Switch branches or restore working tree files')
        parser.add_argument('operands', nargs='+',
                            help="'-- <file>', '<commit> -- <file>' or '<branch>'")
        return parser

    def execute_from_args(self, args: Any):
        self.execute(args.operands)

    def execute(self, operands: List[str]):
        if len(operands) == 2 and operands[0] == "--":
            self.repo.checkout_file(operands[1])
        elif len(operands) == 3 and operands[1] == "--":
            self.repo.checkout_file(operands[2], operands[0])
        elif len(operands) == 1 and operands[0] != "--":
            self.repo.checkout_branch(operands[0])
        else:
            raise UserInputError("Incorrect operands.")
