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

"""Tests for the licensematch command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from licensematch.cli import build_parser, main

_MIT_TEXT = """\
MIT License

Copyright (c) 2024 Example Authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep configuration discovery away from the real checkout."""
    work = tmp_path / 'work'
    work.mkdir()
    monkeypatch.chdir(work)


def _vendor_tree(root: Path) -> Path:
    """Create ``proj`` with an MIT license and two sub-packages."""
    (root / 'proj' / 'a').mkdir(parents=True)
    (root / 'proj' / 'b').mkdir()
    (root / 'proj' / 'LICENSE').write_text(_MIT_TEXT)
    (root / 'proj' / 'main.go').write_text('package proj\n')
    (root / 'proj' / 'a' / 'a.go').write_text('package a\n')
    (root / 'proj' / 'b' / 'b.go').write_text('package b\n')
    (root / 'nolicense').mkdir()
    (root / 'nolicense' / 'x.go').write_text('package x\n')
    return root


class TestParser:
    """Tests for build_parser()."""

    def test_subcommand_required(self) -> None:
        """Running without a command is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_scan_defaults(self) -> None:
        """Report flags default to 'not given'."""
        args = build_parser().parse_args(['scan', 'vendor'])
        assert args.roots == [Path('vendor')]
        assert args.words is None
        assert args.confidence is None
        assert args.all is False
        assert args.verbose is False


class TestScan:
    """Tests for ``licensematch scan``."""

    def test_grouped_table(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Sub-packages sharing a license are shown once."""
        root = _vendor_tree(tmp_path / 'vendor')

        assert main(['scan', str(root)]) == 0

        out = capsys.readouterr().out
        assert 'MIT License' in out
        assert 'proj' in out
        assert 'proj/a' not in out
        assert 'nolicense' in out

    def test_all_packages(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """-a lists every package."""
        root = _vendor_tree(tmp_path / 'vendor')

        assert main(['scan', '-a', str(root)]) == 0

        out = capsys.readouterr().out
        assert 'proj/a' in out
        assert 'proj/b' in out

    def test_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--json prints machine-readable entries."""
        root = _vendor_tree(tmp_path / 'vendor')

        assert main(['scan', '--json', str(root)]) == 0

        data = json.loads(capsys.readouterr().out)
        by_package = {d['package']: d for d in data}
        assert set(by_package) == {'nolicense', 'proj'}
        assert by_package['proj']['license'] == 'MIT License'
        assert by_package['proj']['score'] == 1.0
        assert by_package['nolicense']['license'] is None

    def test_exclude_from_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Settings from --config apply to the scan."""
        root = _vendor_tree(tmp_path / 'vendor')
        config = tmp_path / 'licensematch.toml'
        config.write_text('exclude = ["nolicense"]\n')

        assert main(['scan', '--json', '--config', str(config), str(root)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [d['package'] for d in data] == ['proj']

    def test_config_discovered_from_cwd(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A licensematch.toml in the working directory is picked up."""
        root = _vendor_tree(tmp_path / 'vendor')
        (Path.cwd() / 'licensematch.toml').write_text('group = false\n')

        assert main(['scan', '--json', str(root)]) == 0

        packages = [d['package'] for d in json.loads(capsys.readouterr().out)]
        assert 'proj/a' in packages

    def test_low_confidence_hint(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A modified license is reported with a percentage."""
        root = tmp_path / 'vendor'
        (root / 'pkg').mkdir(parents=True)
        (root / 'pkg' / 'LICENSE').write_text(_MIT_TEXT + '\nAnd also bananas are forbidden everywhere.\n')

        assert main(['scan', '-w', str(root)]) == 0

        out = capsys.readouterr().out
        assert 'MIT License (' in out
        assert '+words:' in out

    def test_bad_config_exits_one(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Configuration errors are reported with exit status 1."""
        root = _vendor_tree(tmp_path / 'vendor')
        config = tmp_path / 'licensematch.toml'
        config.write_text('confidence = 7\n')

        assert main(['scan', '--config', str(config), str(root)]) == 1

        assert 'error:' in capsys.readouterr().err

    def test_extra_templates(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--templates adds user templates to the corpus."""
        templates = tmp_path / 'templates'
        templates.mkdir()
        (templates / 'house.txt').write_text('---\ntitle: House License\n---\nOnly our house may use this code.\n')
        root = tmp_path / 'vendor'
        (root / 'pkg').mkdir(parents=True)
        (root / 'pkg' / 'COPYING').write_text('Only our house may use this code.\n')

        assert main(['scan', '--json', '--templates', str(templates), str(root)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0]['license'] == 'House License'


class TestOtherCommands:
    """Tests for the deb, match, templates and init commands."""

    def test_deb(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Debian copyright files are matched."""
        doc_root = tmp_path / 'doc'
        (doc_root / 'libexample').mkdir(parents=True)
        (doc_root / 'libexample' / 'copyright').write_text(_MIT_TEXT)

        assert main(['deb', '--json', '--doc-root', str(doc_root)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == [
            {
                'package': 'libexample',
                'path': str(doc_root / 'libexample' / 'copyright'),
                'license': 'MIT License',
                'nickname': None,
                'score': 1.0,
                'extra_words': [],
                'missing_words': [],
                'error': None,
            }
        ]

    def test_match_files(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Individual files are matched, unreadable ones reported."""
        good = tmp_path / 'LICENSE'
        good.write_text(_MIT_TEXT)
        missing = tmp_path / 'MISSING'

        assert main(['match', '--json', str(good), str(missing)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0]['license'] == 'MIT License'
        assert data[1]['error'].startswith('could not read')

    def test_templates(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The bundled corpus is listed."""
        assert main(['templates']) == 0
        out = capsys.readouterr().out
        assert 'MIT License' in out
        assert 'Apache License 2.0' in out

    def test_init(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """init writes the defaults once."""
        path = tmp_path / 'licensematch.toml'

        assert main(['init', str(path)]) == 0
        assert path.is_file()
        assert 'Wrote' in capsys.readouterr().out

        assert main(['init', str(path)]) == 0
        assert 'already' in capsys.readouterr().out


class TestFailures:
    """Tests for errors reported with exit status 1 or 2."""

    def test_missing_doc_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An unreadable Debian documentation root is an error, not a traceback."""
        assert main(['deb', '--doc-root', str(tmp_path / 'nope')]) == 1

        err = capsys.readouterr().err
        assert 'error: could not list' in err
        assert 'nope' in err

    def test_missing_scan_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A mistyped root fails instead of reporting an empty audit."""
        assert main(['scan', str(tmp_path / 'typo')]) == 1

        captured = capsys.readouterr()
        assert 'error: could not list' in captured.err
        assert 'Package' not in captured.out

    def test_scan_root_is_a_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A file given as root is an error."""
        path = tmp_path / 'LICENSE'
        path.write_text(_MIT_TEXT)

        assert main(['scan', str(path)]) == 1

        assert 'error:' in capsys.readouterr().err

    @pytest.mark.parametrize('value', ['5', '-0.1', 'high'])
    def test_confidence_out_of_range(self, value: str, capsys: pytest.CaptureFixture[str]) -> None:
        """--confidence accepts only scores between 0 and 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(['scan', '--confidence', value, 'vendor'])
        assert exc_info.value.code == 2
        assert '--confidence' in capsys.readouterr().err

    def test_confidence_bounds_are_inclusive(self) -> None:
        """0 and 1 are valid scores."""
        assert build_parser().parse_args(['scan', '--confidence', '1', 'v']).confidence == 1.0
        assert build_parser().parse_args(['scan', '--confidence', '0', 'v']).confidence == 0.0
