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

r"""Turn license text into a normalized word set.

Pipeline::

    raw bytes ──→ lowercase ──→ strip copyright lines ──→ [\w']+ tokens ──→ WordSet

The word set maps each distinct token to the index of its first
occurrence.  Positions only drive display ordering of extra/missing
words; matching itself only looks at the keys.

Copyright notices (``Copyright (c) 2020 Jane Doe``) are removed before
tokenizing so author names and years never show up as differences
against a template.

Usage::

    from licensematch.normalizer import normalize

    words = normalize(b'Copyright (c) 2020 Jane Doe\nMIT License')
    # {'mit': 0, 'license': 1}
"""

from __future__ import annotations

import re
from typing import Final

from licensematch._types import WordSet

__all__ = [
    'clean_license_data',
    'normalize',
    'tokenize',
]

# Works on bytes so that \w stays ASCII-only and arbitrary encodings
# never fail to decode.
_WORD_RE: Final[re.Pattern[bytes]] = re.compile(rb"[\w']+")

# The glyph is accepted both as UTF-8 (\xc2\xa9) and as Latin-1 (\xa9).
_COPYRIGHT_RE: Final[re.Pattern[bytes]] = re.compile(
    rb'(?i)\s*copyright (?:\xc2\xa9|\xa9|\(c\))?\s*(?:\d{4}|\[year\]).*',
)


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


def clean_license_data(data: bytes | str) -> bytes:
    """Lowercase *data* and delete every copyright notice line fragment."""
    return _COPYRIGHT_RE.sub(b'', _as_bytes(data).lower())


def tokenize(data: bytes | str) -> list[str]:
    """Return every word token of the cleaned *data*, in order.

    Tokens are maximal runs of ASCII word characters and apostrophes,
    so contractions such as ``"licensor's"`` stay a single token.
    """
    return [m.decode('ascii') for m in _WORD_RE.findall(clean_license_data(data))]


def normalize(data: bytes | str) -> WordSet:
    """Build the word set of *data*.

    Args:
        data: Raw document content.  ``str`` input is UTF-8 encoded.

    Returns:
        Mapping of each distinct token to the index of its first
        occurrence among all tokens.  Empty when *data* holds no word
        characters.
    """
    words: WordSet = {}
    for i, token in enumerate(tokenize(data)):
        # Keep the first position: leading words are usually the
        # header and are the most useful to display.
        words.setdefault(token, i)
    return words
