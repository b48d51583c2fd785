# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Command-line entry point for licensematch.

Licenses are detected by looking for files named like LICENSE,
COPYING, COPYRIGHT and other variants in each package directory, and
its parent directories until one is found.  File content is matched
against a set of well-known licenses and the best match is displayed
along with its score.

Usage::

    licensematch scan vendor/            # group packages sharing a license
    licensematch scan -a -w vendor/      # every package, with differing words
    licensematch deb                     # Debian /usr/share/doc/*/copyright
    licensematch match LICENSE COPYING   # individual files
    licensematch templates               # list known templates
    licensematch init pyproject.toml     # add [tool.licensematch]

Exit codes:
    0  Success.
    1  A licensematch error (unreadable template or package root,
       conflicting group, bad configuration).
    2  Invalid command-line usage.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from licensematch._types import LicenseEntry, Template
from licensematch.aggregate import group
from licensematch.audit import audit_debian, audit_directory, audit_packages
from licensematch.config import CONFIG_FILENAME, MatchConfig, find_config, load_config, write_default_config
from licensematch.discover import DEBIAN_DOC_ROOT
from licensematch.errors import LicenseMatchError
from licensematch.logging import configure_logging, get_logger
from licensematch.report import print_report, report_to_json
from licensematch.templates import load_bundled_templates, load_template_dir

__all__ = [
    'build_parser',
    'main',
]

logger = get_logger(__name__)


def _score(value: str) -> float:
    """Parse a score flag, rejecting values outside 0 to 1."""
    try:
        score = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid score: {value!r}') from None
    if not 0.0 <= score <= 1.0:
        raise argparse.ArgumentTypeError(f'must be between 0 and 1, got {value}')
    return score


def build_parser() -> argparse.ArgumentParser:
    """Build the ``licensematch`` argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    common.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    common.add_argument('--json-log', action='store_true', help='Log JSON lines to stderr.')
    common.add_argument('--config', type=Path, help=f'Settings file ({CONFIG_FILENAME} or pyproject.toml).')

    report = argparse.ArgumentParser(add_help=False)
    report.add_argument(
        '-w',
        '--words',
        action='store_true',
        default=None,
        help='Display words not matching the license template.',
    )
    report.add_argument('--confidence', type=_score, help='Minimum score to name a license (default 0.9).')
    report.add_argument('--templates', type=Path, help='Directory of extra license templates.')
    report.add_argument('--json', action='store_true', help='Print the report as JSON.')
    report.add_argument('--show-path', action='store_true', help='Add a column with the license file path.')

    parser = argparse.ArgumentParser(
        prog='licensematch',
        description='Identify the licenses of third-party packages.',
    )
    sub = parser.add_subparsers(dest='command', required=True)

    scan = sub.add_parser('scan', parents=[common, report], help='Audit packages under directory trees.')
    scan.add_argument('roots', nargs='+', type=Path, metavar='ROOT')
    scan.add_argument(
        '-a',
        '--all',
        action='store_true',
        help='Display all individual packages instead of grouping them by license file.',
    )

    deb = sub.add_parser('deb', parents=[common, report], help='Audit installed Debian packages.')
    deb.add_argument('--doc-root', type=Path, default=DEBIAN_DOC_ROOT, help='Debian documentation root.')

    match = sub.add_parser('match', parents=[common, report], help='Match individual license files.')
    match.add_argument('files', nargs='+', type=Path, metavar='FILE')

    templates = sub.add_parser('templates', parents=[common], help='List the known license templates.')
    templates.add_argument('--templates', type=Path, help='Directory of extra license templates.')

    init = sub.add_parser('init', parents=[common], help='Write the default settings.')
    init.add_argument('path', nargs='?', type=Path, default=Path(CONFIG_FILENAME))

    return parser


def _resolve_config(args: argparse.Namespace) -> MatchConfig:
    path = args.config if args.config is not None else find_config(Path.cwd())
    config = load_config(path)
    overrides: dict[str, object] = {}
    if getattr(args, 'words', None):
        overrides['show_words'] = True
    if getattr(args, 'confidence', None) is not None:
        overrides['confidence'] = args.confidence
    if getattr(args, 'templates', None) is not None:
        overrides['templates_dir'] = args.templates
    if getattr(args, 'all', False):
        overrides['group'] = False
    return dataclasses.replace(config, **overrides) if overrides else config


def _load_corpus(config: MatchConfig) -> tuple[Template, ...]:
    templates = load_bundled_templates()
    if config.templates_dir is not None:
        templates += load_template_dir(config.templates_dir)
    logger.debug('corpus_ready', count=len(templates))
    return templates


def _emit(entries: Sequence[LicenseEntry], config: MatchConfig, args: argparse.Namespace, console: Console) -> None:
    if args.json:
        console.out(report_to_json(entries), highlight=False)
        return
    print_report(
        entries,
        console,
        confidence=config.confidence,
        exact_threshold=config.exact_threshold,
        show_words=config.show_words,
        show_path=args.show_path,
    )


def _run(args: argparse.Namespace, console: Console) -> int:
    if args.command == 'init':
        if write_default_config(args.path):
            console.print(f'Wrote licensematch settings to {args.path}')
        else:
            console.print(f'{args.path} already has licensematch settings')
        return 0

    config = _resolve_config(args)
    templates = _load_corpus(config)

    if args.command == 'templates':
        for template in templates:
            suffix = f' ({template.nickname})' if template.nickname else ''
            console.print(f'{template.title}{suffix}', markup=False)
        return 0

    if args.command == 'scan':
        entries: list[LicenseEntry] = []
        for root in args.roots:
            entries.extend(audit_directory(root, templates, exclude=config.exclude))
        if config.group:
            entries = group(entries)
    elif args.command == 'deb':
        entries = audit_debian(templates, doc_root=args.doc_root, exclude=config.exclude)
    else:
        entries = audit_packages(((str(f), str(f)) for f in args.files), templates)

    _emit(entries, config, args, console)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``licensematch`` command.

    Returns:
        The process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)
    try:
        return _run(args, Console())
    except LicenseMatchError as exc:
        logger.error('licensematch_failed', error=str(exc))
        print(f'error: {exc}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
