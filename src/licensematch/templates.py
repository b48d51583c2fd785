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

r"""Load canonical license templates.

Template files use the choosealicense.com front-matter layout::

    ---
    title: MIT License
    spdx-id: MIT
    nickname: Expat
    ---

    MIT License

    Copyright (c) [year] [fullname]
    ...

Parsing is a three-state automaton over the lines of a blob:

    ┌──────────┬──────────────────┬──────────────────────┬──────────┐
    │ State    │ Line (stripped)  │ Action               │ Next     │
    ├──────────┼──────────────────┼──────────────────────┼──────────┤
    │ PREAMBLE │ ``---``          │ -                    │ METADATA │
    │ PREAMBLE │ other            │ ignore               │ PREAMBLE │
    │ METADATA │ ``---``          │ -                    │ BODY     │
    │ METADATA │ ``title: X``     │ title = X            │ METADATA │
    │ METADATA │ ``nickname: X``  │ nickname = X         │ METADATA │
    │ METADATA │ other            │ ignore               │ METADATA │
    │ BODY     │ any (raw)        │ append to body       │ BODY     │
    └──────────┴──────────────────┴──────────────────────┴──────────┘

A blob that never reaches ``BODY`` yields a template with whatever
metadata was seen and an empty word set.  Format problems never raise;
only read failures do (:class:`CorpusReadError`).

Usage::

    from licensematch.templates import load_bundled_templates

    templates = load_bundled_templates()
"""

from __future__ import annotations

import enum
import importlib.resources
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from licensematch._types import CorpusBlob, Template
from licensematch.errors import CorpusReadError
from licensematch.logging import get_logger
from licensematch.normalizer import normalize

__all__ = [
    'ParseState',
    'bundled_corpus',
    'directory_corpus',
    'load_bundled_templates',
    'load_template_dir',
    'load_templates',
    'parse_template',
]

logger = get_logger(__name__)

_DELIMITER = '---'
_METADATA_KEYS = ('title', 'nickname')


class ParseState(enum.Enum):
    """States of the template front-matter scanner."""

    PREAMBLE = 'preamble'
    METADATA = 'metadata'
    BODY = 'body'


def parse_template(content: str) -> Template:
    """Parse one template text into a :class:`Template`.

    Args:
        content: Full template text, front matter included.

    Returns:
        The parsed template.  Missing delimiters leave the title,
        nickname or word set empty instead of raising.
    """
    state = ParseState.PREAMBLE
    meta: dict[str, str] = {}
    body: list[str] = []
    for raw in content.splitlines():
        line = raw.strip()
        if state is ParseState.PREAMBLE:
            if line == _DELIMITER:
                state = ParseState.METADATA
        elif state is ParseState.METADATA:
            if line == _DELIMITER:
                state = ParseState.BODY
                continue
            key, sep, value = line.partition(':')
            if sep and key in _METADATA_KEYS:
                meta[key] = value.strip()
        else:
            body.append(raw + '\n')

    return Template(
        title=meta.get('title', ''),
        nickname=meta.get('nickname', ''),
        words=MappingProxyType(normalize(''.join(body))),
    )


def _read_blob(blob: CorpusBlob) -> str:
    try:
        content = blob.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusReadError(blob.name, exc) from exc
    return content


def load_templates(corpus: Iterable[CorpusBlob]) -> list[Template]:
    """Parse every blob of *corpus* into templates.

    Templates are returned in corpus order.  Identical blobs produce
    distinct templates.

    Raises:
        CorpusReadError: If any blob cannot be read.  No partial list
            is returned.
    """
    templates: list[Template] = []
    for blob in corpus:
        template = parse_template(_read_blob(blob))
        if not template.title:
            logger.debug('template_without_title', name=blob.name)
        templates.append(template)
    logger.debug('templates_loaded', count=len(templates))
    return templates


def bundled_corpus() -> list[CorpusBlob]:
    """Return the template blobs shipped in ``licensematch/data/templates``."""
    root = importlib.resources.files('licensematch') / 'data' / 'templates'
    blobs: list[CorpusBlob] = []
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        if not entry.name.endswith('.txt'):
            continue
        blobs.append(CorpusBlob(name=entry.name, read=entry.read_bytes))
    return blobs


def directory_corpus(path: Path) -> list[CorpusBlob]:
    """Return one blob per ``*.txt`` file in *path*, sorted by name.

    Raises:
        CorpusReadError: If *path* cannot be listed.
    """
    try:
        files = sorted(p for p in path.iterdir() if p.suffix == '.txt' and p.is_file())
    except OSError as exc:
        raise CorpusReadError(str(path), exc) from exc
    return [CorpusBlob.from_path(p) for p in files]


def load_bundled_templates() -> tuple[Template, ...]:
    """Load the built-in template corpus."""
    return tuple(load_templates(bundled_corpus()))


def load_template_dir(path: Path) -> tuple[Template, ...]:
    """Load every template file of a user directory."""
    return tuple(load_templates(directory_corpus(path)))
