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

r"""License template matching for dependency audits.

The engine has four pieces, leaf first:

- :func:`normalize`: raw bytes to a word set.
- :func:`load_templates`: canonical license texts to :class:`Template`.
- :func:`match`: best template, Dice score and word differences.
- :func:`group`: merge packages sharing one license file.

Usage::

    from licensematch import group, load_bundled_templates, match, normalize

    templates = load_bundled_templates()
    result = match(normalize(Path('LICENSE').read_bytes()), templates)
    print(result.template.title, f'{result.score:.0%}')
"""

from licensematch._types import (
    NO_MATCH_SCORE,
    CorpusBlob,
    LicenseEntry,
    MatchResult,
    Template,
    Word,
    WordSet,
)
from licensematch.aggregate import group, longest_common_prefix
from licensematch.errors import (
    AggregationConflict,
    ConfigError,
    CorpusReadError,
    DiscoveryError,
    LicenseMatchError,
)
from licensematch.matcher import match, match_document
from licensematch.normalizer import normalize
from licensematch.templates import load_bundled_templates, load_templates, parse_template

__all__ = [
    'NO_MATCH_SCORE',
    'AggregationConflict',
    'ConfigError',
    'CorpusBlob',
    'CorpusReadError',
    'DiscoveryError',
    'LicenseEntry',
    'LicenseMatchError',
    'MatchResult',
    'Template',
    'Word',
    'WordSet',
    'group',
    'load_bundled_templates',
    'load_templates',
    'longest_common_prefix',
    'match',
    'match_document',
    'normalize',
    'parse_template',
]
