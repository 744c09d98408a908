"""Remote command implementations (add-remote, rm-remote, push, fetch, pull)."""
from argparse import ArgumentParser, _SubParsersAction
from typing import Any
from .base import BaseCommand
from .merge import report_merge

def _remote_branch_parser(subparsers: _SubParsersAction, name: str, help: str) -> ArgumentParser:
    parser = subparsers.add_parser(name, help=help)
    parser.add_argument('remote', help='Remote name')
    parser.add_argument('branch', help='Remote branch name')
    return parser

class AddRemoteCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('add-remote', help='Register another repository as a remote')
        parser.add_argument('name', help='Remote name')
        parser.add_argument('path', help="Path to the remote's .twig directory")
        return parser

    def execute_from_args(self, args: Any):
        self.repo.add_remote(args.name, args.path)

class RmRemoteCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        parser = subparsers.add_parser('rm-remote', help='Forget a remote')
        parser.add_argument('name', help='Remote name')
        return parser

    def execute_from_args(self, args: Any):
        self.repo.rm_remote(args.name)

class PushCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        return _remote_branch_parser(subparsers, 'push', 'Append local commits to a remote branch')

    def execute_from_args(self, args: Any):
        self.repo.push(args.remote, args.branch)

class FetchCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        return _remote_branch_parser(subparsers, 'fetch', 'Copy a remote branch into <remote>/<branch>')

    def execute_from_args(self, args: Any):
        self.repo.fetch(args.remote, args.branch)

class PullCommand(BaseCommand):
    @classmethod
    def register_parser(cls, subparsers: _SubParsersAction) -> ArgumentParser:
        return _remote_branch_parser(subparsers, 'pull', 'Fetch a remote branch and merge it')

    def execute_from_args(self, args: Any):
        report_merge(self.repo.pull(args.remote, args.branch))
