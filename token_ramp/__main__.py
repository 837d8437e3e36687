"""token-ramp — Derive colour design tokens from key colours and match colours back to tokens.

Usage: token-ramp <command> <document.json> [options]

Commands are auto-discovered from token_ramp/commands/.
Each command module's docstring is its documentation.
Run `token-ramp help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, token-ramp looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import logging
import os
import sys

from token_ramp import registry
from token_ramp.core.config import Settings, load_env
from token_ramp.core.document import DocumentError, parse_document_file, write_document_file
from token_ramp.core.report import format_json, format_text
from token_ramp.core.types import OpacityPolicy, Report


def _short_help(name: str, fallback: str) -> str:
    doc = registry.docs(name)
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  token-ramp ramp document.json --collection Colors\n'
        '  token-ramp ramp document.json --collection Colors --out updated.json --json\n'
        '  token-ramp ramp document.json --policy boosted --fail-on-warning\n'
        '  token-ramp create document.json --collection Colors\n'
        '  token-ramp scan document.json --collection Colors\n'
        '  token-ramp collections document.json\n'
        '  token-ramp help ramp\n'
        '\n'
        'Environment (set in .env or environment):\n'
        '  TOKEN_RAMP_COLLECTION      name for new collections (default: Color Variables)\n'
        '  TOKEN_RAMP_OPACITY_POLICY  reuse | boosted (default: reuse)\n'
        '  TOKEN_RAMP_LOG_LEVEL       DEBUG | INFO | WARNING | ERROR (default: WARNING)\n'
    )
    parser = argparse.ArgumentParser(
        prog='token-ramp',
        description='Derive colour design tokens from key colours and match colours back to tokens.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        p.add_argument('document', help='Path to the document JSON (selection + collections)')
        p.add_argument('-c', '--collection', help='Target collection id or name')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-o', '--out', metavar='PATH', help='Write the updated document JSON here')
        p.add_argument(
            '-p',
            '--policy',
            choices=[policy.value for policy in OpacityPolicy],
            default=None,
            help='Opacity-scale policy (default: TOKEN_RAMP_OPACITY_POLICY or reuse)',
        )
        p.add_argument(
            '-w',
            '--fail-on-warning',
            action='store_true',
            help='Exit 1 if any warning was produced (CI gating)',
        )

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: token-ramp help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = registry.docs(topic)
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=settings.log_level, stream=sys.stderr, format='%(levelname)s %(name)s: %(message)s')
    if env_path:
        print(f'token-ramp: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    if not os.path.isfile(args.document):
        print(f'Error: document not found: {args.document}', file=sys.stderr)
        sys.exit(1)
    try:
        document = parse_document_file(args.document)
    except DocumentError as e:
        print(f'Error: {args.document}: {e}', file=sys.stderr)
        sys.exit(1)

    args.settings = settings
    report = Report(document_path=args.document, command=args.command)
    registry.get(args.command).execute(document, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    if not report.ok:
        sys.exit(1)

    if args.out:
        write_document_file(document, args.out)
        print(f'token-ramp: wrote {args.out}', file=sys.stderr)

    # CI gate runs after output so the report is visible on failure
    if args.fail_on_warning and report.warnings:
        print(f'\nFAIL: {len(report.warnings)} warning(s)', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
