"""CLI Argument Parsing"""

import argparse
import argcomplete

from aichangelog import __version__
from aichangelog.config import VALID_PROVIDERS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ai-changelog',
        description='Prepend an AI-written release entry to CHANGELOG.md',
        epilog='Example: npm run release:minor (or ai-changelog --bump minor)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Release options
    parser.add_argument('-b', '--bump', type=str, choices=['major', 'minor', 'patch'], help='Version component to bump (default: from the lifecycle event, else patch)')
    parser.add_argument('--trigger-env', type=str, metavar='VAR', help='Environment variable naming the release trigger (default: npm_lifecycle_event)')
    parser.add_argument('-o', '--output', type=str, metavar='PATH', help='Changelog file (default: CHANGELOG.md)')
    parser.add_argument('--hint', type=str, metavar='TEXT', help='Add context: --hint "drops Python 3.9 support"')
    parser.add_argument('--dry-run', action='store_true', help='Print the entry without writing the changelog')

    # LLM options
    parser.add_argument('-p', '--provider', type=str, choices=sorted(VALID_PROVIDERS), help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')
    parser.add_argument('--timeout', type=int, metavar='SECONDS', help='Model request timeout')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, tokens used)')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Configure defaults')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
