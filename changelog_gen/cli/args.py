"""CLI Argument Parsing"""

import argparse
import argcomplete

from changelog_gen import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='changelog-gen',
        description='Generate a changelog from the commits between two refs',
        epilog='Example: changelog-gen --repo owner/repo --base-ref v1.0.0 --head-ref main'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Repository and refs
    parser.add_argument('--repo', type=str, metavar='OWNER/REPO', help='Repository (default: $GITHUB_REPOSITORY)')
    parser.add_argument('--base-ref', type=str, metavar='REF', help='Start of the range (default: latest release)')
    parser.add_argument('--head-ref', type=str, metavar='REF', help='End of the range (default: $GITHUB_SHA)')
    parser.add_argument('--ref', type=str, metavar='REF', help='Ref that triggered the run (default: $GITHUB_REF)')
    parser.add_argument('--path', type=str, metavar='PATH', help='Only include commits touching PATH')
    parser.add_argument('--token', type=str, metavar='TOKEN', help='GitHub token (default: $GITHUB_TOKEN)')
    parser.add_argument('--api-url', type=str, metavar='URL', help='REST API base (default: $GITHUB_API_URL)')

    # Rendering options
    parser.add_argument('--order', type=str, choices=['asc', 'desc'], help='Commit order within a section (default: desc)')
    parser.add_argument('--template', type=str, metavar='TEXT', help='Template, e.g. "## Bugs\\n{{fix}}"')
    parser.add_argument('--template-file', type=str, metavar='FILE', help='Read the template from FILE')
    parser.add_argument('--custom-emoji', type=str, metavar='LIST', help='Emoji overrides: type🆎,chore💄,fix🐞')
    parser.add_argument('--show-emoji', action=argparse.BooleanOptionalAction, default=None, help='Prefix lines with the type emoji')
    parser.add_argument('--remove-type', action=argparse.BooleanOptionalAction, default=None, help='Strip the "type(scope): " prefix')
    parser.add_argument('--original-markdown', action=argparse.BooleanOptionalAction, default=None, help='Plain @login instead of profile links')
    parser.add_argument('--filter-author', type=str, metavar='LOGIN', help='Only include commits by LOGIN')
    parser.add_argument('--filter', type=str, metavar='REGEX', help='Keep matching commits, or rewrite with s/REGEX/REPL/')
    parser.add_argument('--gh-pages', type=str, metavar='BRANCH', help='Branch whose head hash is reported (default: gh-pages)')

    # Output
    parser.add_argument('-o', '--output', type=str, metavar='FILE', help='Append results to FILE (default: $GITHUB_OUTPUT, else stdout)')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging')

    # Setup/config
    parser.add_argument('--show-config', action='store_true', dest='display_config', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Show how to install tab completion')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
