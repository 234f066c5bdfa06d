"""CLI Argument Parsing"""

import argparse
import argcomplete

from git_ai_commit import __version__
from git_ai_commit.config import VALID_PROVIDERS


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--hint', type=str, metavar='TEXT', help='Add context: --hint "fixing the login bug"')
    parser.add_argument('-p', '--provider', type=str, choices=sorted(VALID_PROVIDERS), help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')
    parser.add_argument('--base', type=str, metavar='BRANCH', help='Pull request base branch (default: main)')
    parser.add_argument('--remote', type=str, metavar='NAME', help='Remote to push to (default: origin)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logs (git commands, retries, API calls)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gac',
        description='Commit staged changes with an AI-written message, optionally opening a pull request',
        epilog='Example: gac commit --pr'
    )
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    commit_parser = subparsers.add_parser('commit', help='Generate a commit message, commit and push')
    commit_parser.add_argument('--pr', action='store_true', help='Create or update a pull request after pushing')
    _add_generation_options(commit_parser)

    commit_pr_parser = subparsers.add_parser('commit-pr', help='Shorthand for: commit --pr')
    _add_generation_options(commit_pr_parser)
    commit_pr_parser.set_defaults(pr=True)

    config_parser = subparsers.add_parser('config', help='Show current configuration')
    config_parser.add_argument('--install-completion', action='store_true', help='Show how to enable shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
