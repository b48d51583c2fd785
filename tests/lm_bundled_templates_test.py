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

"""Integration tests against the bundled license templates."""

from __future__ import annotations

import pytest
from licensematch._types import Template
from licensematch.matcher import match, match_document
from licensematch.templates import bundled_corpus, load_bundled_templates

_BSD_3_CLAUSE = """\
Copyright (c) 2015, The Example Project Authors
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this
   list of conditions and the following disclaimer.

2. Redistributions in binary form must reproduce the above copyright notice,
   this list of conditions and the following disclaimer in the documentation
   and/or other materials provided with the distribution.

3. Neither the name of the copyright holder nor the names of its
   contributors may be used to endorse or promote products derived from
   this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""


@pytest.fixture(scope='module')
def templates() -> tuple[Template, ...]:
    """Load the bundled corpus once."""
    return load_bundled_templates()


class TestBundledCorpus:
    """Tests for the shipped template files."""

    def test_sorted_by_file_name(self) -> None:
        """Blobs are listed in file name order."""
        names = [b.name for b in bundled_corpus()]
        assert names == sorted(names)
        assert 'mit.txt' in names

    def test_every_template_is_complete(self, templates: tuple[Template, ...]) -> None:
        """Each template has a title and a body."""
        assert len(templates) == 9
        for template in templates:
            assert template.title
            assert template.words

    def test_titles(self, templates: tuple[Template, ...]) -> None:
        """Well-known licenses are present."""
        titles = {t.title for t in templates}
        assert {'MIT License', 'Apache License 2.0', 'ISC License', 'The Unlicense'} <= titles

    def test_each_template_matches_itself(self, templates: tuple[Template, ...]) -> None:
        """No two bundled templates share a word set."""
        for template in templates:
            result = match(template.words, templates)
            assert result.template is template
            assert result.score == 1.0


class TestRealWorldDocuments:
    """Tests with license files as they appear in projects."""

    def test_bsd_3_clause(self, templates: tuple[Template, ...]) -> None:
        """A filled-in BSD 3-Clause file is not mistaken for 2-Clause."""
        result = match_document(_BSD_3_CLAUSE.encode(), templates)
        assert result.template is not None
        assert result.template.title.startswith('BSD 3-Clause')
        assert result.score > 0.9

    def test_unrelated_text(self, templates: tuple[Template, ...]) -> None:
        """Prose that is not a license scores low."""
        result = match_document(b'This repository holds the build scripts for our website.', templates)
        assert result.found
        assert result.score < 0.5
