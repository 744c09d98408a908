"""
Command Line Interface for twig.
"""
import argparse
import sys
from typing import Dict, List, Optional, Type
from .core.repository import Twig
from .commands import (
    BaseCommand, InitCommand, AddCommand, CommitCommand, RmCommand, LogCommand,
    GlobalLogCommand, FindCommand, StatusCommand, BranchCommand, RmBranchCommand,
    CheckoutCommand, ResetCommand, MergeCommand, AddRemoteCommand,
    RmRemoteCommand, PushCommand, FetchCommand, PullCommand
)
from .exceptions import TwigError, UserInputError
from .logging_config import configure_logging, resolve_level

COMMANDS: Dict[str, Type[BaseCommand]] = {
    "init": InitCommand,
    "add": AddCommand,
    "commit": CommitCommand,
    "rm": RmCommand,
    "log": LogCommand,
    "global-log": GlobalLogCommand,
    "find": FindCommand,
    "status": StatusCommand,
    "branch": BranchCommand,
    "rm-branch": RmBranchCommand,
    "checkout": CheckoutCommand,
    "reset": ResetCommand,
    "merge": MergeCommand,
    "add-remote": AddRemoteCommand,
    "rm-remote": RmRemoteCommand,
    "push": PushCommand,
    "fetch": FetchCommand,
    "pull": PullCommand,
}

class TwigArgumentParser(argparse.ArgumentParser):
    """Parser that reports bad operands as a twig error instead of exiting."""

    def error(self, message):
        raise UserInputError(f"Incorrect operands. ({message})")

class CustomHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that suppresses subcommand help in main help."""
    def _format_action(self, action):
        # Skip subparsers action to avoid showing individual command help
        if isinstance(action, argparse._SubParsersAction):
            return ''
        return super()._format_action(action)

def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = TwigArgumentParser(
        description="twig - a small content-addressed version control system",
        prog="twig",
        formatter_class=CustomHelpFormatter,
        epilog="""These are the twig commands:

start a working area
   init        Create an empty twig repository

work on the current change
   add         Stage a file for the next commit
   rm          Unstage a file or stage its removal

examine the history and state
   log         Show the current branch's history
   global-log  Show every commit
   find        Print the ids of commits with a given message
   status      Show branches, staged files and working tree changes

grow and tweak your history
   commit      Record the staged changes
   branch      Create a branch
   rm-branch   Delete a branch
   checkout    Switch branches or restore a file
   reset       Move the current branch to a commit
   merge       Merge a branch into the current branch

collaborate
   add-remote  Register another repository
   rm-remote   Forget a remote
   push        Append local commits to a remote branch
   fetch       Copy a remote branch into <remote>/<branch>
   pull        Fetch and merge a remote branch"""
    )
    parser.add_argument(
        "--repo",
        default=".",
        help="Repository path (default: current directory)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__import__('twig').__version__}"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="twig command to run (see command list below)",
        metavar="<command>"
    )

    for command_class in COMMANDS.values():
        command_class.register_parser(subparsers)

    return parser

def command_index(argv: List[str]) -> Optional[int]:
    """Position of the subcommand: the first argument that is neither an option nor its value."""
    skip_next = False
    for i, arg in enumerate(argv):
        if skip_next:
            skip_next = False
        elif arg == "--repo":
            skip_next = True
        elif not arg.startswith("-"):
            return i
    return None

def parse_args(parser: argparse.ArgumentParser, argv: List[str]) -> argparse.Namespace:
    """Parse ``argv``, handling ``checkout ... -- <file>`` outside argparse."""
    checkout_index = command_index(argv)
    if (checkout_index is not None and argv[checkout_index] == "checkout"
            and "--" in argv[checkout_index + 1:]):
        args = parser.parse_args(argv[:checkout_index])
        args.command = "checkout"
        args.operands = argv[checkout_index + 1:]
        return args
    return parser.parse_args(argv)

def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = create_parser()

    try:
        args = parse_args(parser, argv)
        if not args.command:
            raise UserInputError("Please enter a command.")

        # Create repository instance
        twig = Twig(args.repo)
        configure_logging(resolve_level(args.verbose, twig.config.log_level))

        command = COMMANDS[args.command](twig)
        command.execute_from_args(args)

    except TwigError as e:
        print(f"fatal: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)

if __name__ == "__main__":
    main()
