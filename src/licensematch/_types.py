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

"""Shared leaf-level types used across licensematch.

This module must have **zero** imports from other ``licensematch``
modules to avoid circular-import chains.  It is safe to import from
any module in the project.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

__all__ = [
    'NO_MATCH_SCORE',
    'CorpusBlob',
    'LicenseEntry',
    'MatchResult',
    'Template',
    'Word',
    'WordSet',
]

#: Normalized word → index of its first occurrence among all tokens.
WordSet = dict[str, int]

#: Score reported when there was no template to compare against.
NO_MATCH_SCORE: Final[float] = -1.0


@dataclass(frozen=True, eq=False)
class Template:
    """A canonical license text used as a matching target.

    Templates compare by identity: two templates built from the same
    text are still two distinct corpus entries.

    Attributes:
        title: Display name (e.g. ``"MIT License"``).
        nickname: Optional short name (e.g. ``"GNU GPLv3"``). Empty
            string when the template does not declare one.
        words: Normalized word set of the template body.
    """

    title: str
    nickname: str = ''
    words: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Word:
    """A word and the position it was first seen at."""

    text: str
    pos: int


@dataclass(frozen=True)
class MatchResult:
    """Best template match for a single document.

    Attributes:
        template: The best-matching template, or ``None`` when the
            corpus was empty.
        score: Dice coefficient in ``[0, 1]``, or
            :data:`NO_MATCH_SCORE` when ``template`` is ``None``.
        extra_words: Words in the document but not in the template,
            in document order.
        missing_words: Words in the template but not in the document,
            in template order.
    """

    template: Template | None
    score: float
    extra_words: tuple[str, ...] = ()
    missing_words: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        """``True`` if a template was selected."""
        return self.template is not None


@dataclass(frozen=True)
class LicenseEntry:
    """License information for one inspected package.

    Attributes:
        package: Slash-separated package identifier
            (e.g. ``"github.com/blevesearch/bleve/index"``).
        path: Path of the license file that was matched. Empty when
            no license file was found.
        result: Match outcome. ``None`` when no file was found or
            reading it failed.
        error: Error message when the license file could not be
            processed. Mutually exclusive with ``result``.
    """

    package: str
    path: str = ''
    result: MatchResult | None = None
    error: str = ''

    def __post_init__(self) -> None:
        """Reject entries carrying both a result and an error."""
        if self.result is not None and self.error:
            raise ValueError(f'entry {self.package!r} has both a match result and an error')

    @property
    def template(self) -> Template | None:
        """The matched template, if any."""
        return self.result.template if self.result is not None else None

    @property
    def score(self) -> float:
        """The match score, :data:`NO_MATCH_SCORE` without a result."""
        return self.result.score if self.result is not None else NO_MATCH_SCORE

    @property
    def extra_words(self) -> tuple[str, ...]:
        return self.result.extra_words if self.result is not None else ()

    @property
    def missing_words(self) -> tuple[str, ...]:
        return self.result.missing_words if self.result is not None else ()


@dataclass(frozen=True)
class CorpusBlob:
    """A named template text whose content is read on demand.

    Attributes:
        name: Blob name, used in diagnostics (usually a file name).
        read: Zero-argument callable returning the blob content.  May
            raise :class:`OSError` on I/O failure.
    """

    name: str
    read: Callable[[], str | bytes]

    @classmethod
    def from_text(cls, name: str, text: str | bytes) -> CorpusBlob:
        """Wrap in-memory content."""
        return cls(name=name, read=lambda: text)

    @classmethod
    def from_path(cls, path: Path) -> CorpusBlob:
        """Read *path* lazily as UTF-8 text."""
        return cls(name=path.name, read=lambda: path.read_text(encoding='utf-8'))
