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

r"""Score a document's word set against every license template.

Similarity is the Dice coefficient over distinct words::

    score = 2 * |doc ∩ template| / (|doc| + |template|)

Key Concepts::

    ┌─────────────────┬───────────────────────────────────────────────┐
    │ Concept         │ Plain-English                                 │
    ├─────────────────┼───────────────────────────────────────────────┤
    │ Extra words     │ In the document, not in the template.  Often  │
    │                 │ a custom clause or a project name.            │
    ├─────────────────┼───────────────────────────────────────────────┤
    │ Missing words   │ In the template, not in the document.  Often  │
    │                 │ a truncated or edited license.                │
    ├─────────────────┼───────────────────────────────────────────────┤
    │ Tie             │ The first template in corpus order wins.      │
    └─────────────────┴───────────────────────────────────────────────┘

Usage::

    from licensematch.matcher import match_document

    result = match_document(Path('LICENSE').read_bytes(), templates)
    if result.found:
        print(result.template.title, result.score)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from licensematch._types import NO_MATCH_SCORE, MatchResult, Template, Word, WordSet
from licensematch.normalizer import normalize

__all__ = [
    'dice_score',
    'match',
    'match_document',
    'ordered_words',
]


def ordered_words(words: Iterable[Word]) -> tuple[str, ...]:
    """Sort *words* by first position and drop the positions."""
    return tuple(w.text for w in sorted(words, key=lambda w: w.pos))


def dice_score(common: int, left: int, right: int) -> float:
    """Return ``2 * common / (left + right)``, ``0.0`` for two empty sets."""
    total = left + right
    if total == 0:
        return 0.0
    return 2 * common / total


def _difference(words: Mapping[str, int], other: Mapping[str, int]) -> list[Word]:
    return [Word(text, pos) for text, pos in words.items() if text not in other]


def match(document_words: Mapping[str, int], templates: Sequence[Template]) -> MatchResult:
    """Return the template closest to *document_words*.

    Args:
        document_words: Normalized word set of the inspected document.
        templates: Candidate templates, in priority order.

    Returns:
        The best :class:`MatchResult`.  With no templates the result has
        no template and a score of :data:`NO_MATCH_SCORE`.
    """
    best: Template | None = None
    best_score = NO_MATCH_SCORE
    best_extra: list[Word] = []
    best_missing: list[Word] = []

    for template in templates:
        extra = _difference(document_words, template.words)
        common = len(document_words) - len(extra)
        score = dice_score(common, len(document_words), len(template.words))
        # Strict comparison: on ties the earlier template stays.
        if score > best_score:
            best = template
            best_score = score
            best_extra = extra
            best_missing = _difference(template.words, document_words)

    return MatchResult(
        template=best,
        score=best_score,
        extra_words=ordered_words(best_extra),
        missing_words=ordered_words(best_missing),
    )


def match_document(data: bytes | str, templates: Sequence[Template]) -> MatchResult:
    """Normalize raw *data* and :func:`match` it against *templates*."""
    words: WordSet = normalize(data)
    return match(words, templates)
