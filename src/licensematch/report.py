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

r"""Render license audit results.

Example table output::

    Package                          License
    github.com/blevesearch/bleve     Apache License 2.0
    github.com/golang/protobuf       BSD 3-Clause "New" or "Revised" License (97%)
                                       +words: golang
    github.com/vendored/thing        ? (MIT License, 61%)
    internal/tools                   ?

Labels follow the score of each entry:

- above ``exact_threshold``: the template title alone;
- at or above ``confidence``: title and percentage, plus the differing
  words when requested;
- below ``confidence``: ``?`` with the closest title and percentage;
- no license file: ``?``; unreadable file: the error text.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from licensematch._types import LicenseEntry

__all__ = [
    'UNKNOWN_LABEL',
    'format_report',
    'license_label',
    'print_report',
    'report_to_json',
]

UNKNOWN_LABEL = '?'


def _percent(score: float) -> str:
    return f'{int(100 * score):2d}%'


def license_label(
    entry: LicenseEntry,
    *,
    confidence: float = 0.9,
    exact_threshold: float = 0.99,
    show_words: bool = False,
) -> str:
    """Return the license column text for *entry*.

    Args:
        entry: The audited package.
        confidence: Minimum score to name the license.
        exact_threshold: Score above which no percentage is shown.
        show_words: Append ``+words:`` / ``-words:`` lines for
            confident but inexact matches.

    Returns:
        A possibly multi-line label.
    """
    template = entry.template
    if template is None:
        if entry.error:
            return entry.error.replace('\n', ' ')
        return UNKNOWN_LABEL

    score = entry.score
    if score > exact_threshold:
        return template.title
    if score < confidence:
        return f'{UNKNOWN_LABEL} ({template.title}, {_percent(score)})'

    label = f'{template.title} ({_percent(score)})'
    if show_words and entry.extra_words:
        label += '\n  +words: ' + ', '.join(entry.extra_words)
    if show_words and entry.missing_words:
        label += '\n  -words: ' + ', '.join(entry.missing_words)
    return label


def _style_for(entry: LicenseEntry, *, confidence: float) -> str:
    if entry.error:
        return 'red'
    if entry.template is None or entry.score < confidence:
        return 'yellow'
    return ''


def print_report(
    entries: Sequence[LicenseEntry],
    console: Console | None = None,
    *,
    confidence: float = 0.9,
    exact_threshold: float = 0.99,
    show_words: bool = False,
    show_path: bool = False,
) -> None:
    """Print *entries* as a Rich table.

    Args:
        entries: Audited packages, in display order.
        console: Rich :class:`Console` to print to.  When ``None``,
            a default ``Console()`` is created (auto-detects TTY).
        confidence: See :func:`license_label`.
        exact_threshold: See :func:`license_label`.
        show_words: See :func:`license_label`.
        show_path: Add a column with the license file path.
    """
    if console is None:
        console = Console()

    table = Table(
        show_header=True,
        header_style='bold',
        show_edge=False,
        pad_edge=False,
        box=None,
    )
    table.add_column('Package', style='bold', no_wrap=True)
    table.add_column('License')
    if show_path:
        table.add_column('Path', style='dim')

    for entry in entries:
        label = license_label(
            entry,
            confidence=confidence,
            exact_threshold=exact_threshold,
            show_words=show_words,
        )
        row = [Text(entry.package), Text(label, style=_style_for(entry, confidence=confidence))]
        if show_path:
            row.append(Text(entry.path))
        table.add_row(*row)

    console.print(table)


def format_report(
    entries: Sequence[LicenseEntry],
    *,
    color: bool = False,
    width: int = 200,
    confidence: float = 0.9,
    exact_threshold: float = 0.99,
    show_words: bool = False,
    show_path: bool = False,
) -> str:
    """Format *entries* as a string.

    Thin wrapper around :func:`print_report` that captures the Rich
    output.  Useful for tests and non-interactive callers.
    """
    buf = StringIO()
    console = Console(file=buf, force_terminal=color, width=width)
    print_report(
        entries,
        console=console,
        confidence=confidence,
        exact_threshold=exact_threshold,
        show_words=show_words,
        show_path=show_path,
    )
    return buf.getvalue().rstrip('\n')


def report_to_json(entries: Sequence[LicenseEntry], *, indent: int = 2) -> str:
    """Serialize *entries* to JSON.

    Scores are ``null`` for entries without a match.
    """
    records = []
    for entry in entries:
        template = entry.template
        records.append({
            'package': entry.package,
            'path': entry.path,
            'license': template.title if template is not None else None,
            'nickname': (template.nickname or None) if template is not None else None,
            'score': round(entry.score, 4) if template is not None else None,
            'extra_words': list(entry.extra_words),
            'missing_words': list(entry.missing_words),
            'error': entry.error or None,
        })
    return json.dumps(records, indent=indent)
