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

"""Configuration loading for licensematch.

Settings are read from ``licensematch.toml`` or from the
``[tool.licensematch]`` table of ``pyproject.toml``::

    [tool.licensematch]
    confidence = 0.9          # minimum score to name a license
    exact_threshold = 0.99    # above this, no percentage is shown
    show_words = false        # print +words / -words lines
    group = true              # merge packages sharing a license file
    templates_dir = ""        # extra templates, relative to this file
    exclude = ["testdata/*"]  # fnmatch patterns of package ids to skip

Command-line flags override file values (see :mod:`licensematch.cli`).
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.items
from tomlkit.exceptions import ParseError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from licensematch.errors import ConfigError
from licensematch.logging import get_logger

__all__ = [
    'CONFIG_FILENAME',
    'MatchConfig',
    'find_config',
    'load_config',
    'write_default_config',
]

logger = get_logger(__name__)

CONFIG_FILENAME = 'licensematch.toml'
_PYPROJECT = 'pyproject.toml'


@dataclass(frozen=True)
class MatchConfig:
    """Resolved licensematch settings.

    Attributes:
        confidence: Minimum score for a license to be reported by name.
        exact_threshold: Score above which a match is shown without a
            percentage.
        show_words: Whether to render differing words.
        group: Whether to merge entries sharing a license file.
        templates_dir: Extra template directory, or ``None``.
        exclude: ``fnmatch`` patterns of package identifiers to skip.
    """

    confidence: float = 0.9
    exact_threshold: float = 0.99
    show_words: bool = False
    group: bool = True
    templates_dir: Path | None = None
    exclude: tuple[str, ...] = field(default_factory=tuple)


_EXPECTED_TYPES: dict[str, tuple[type, ...]] = {
    'confidence': (int, float),
    'exact_threshold': (int, float),
    'show_words': (bool,),
    'group': (bool,),
    'templates_dir': (str,),
    'exclude': (list,),
}


def _validate(table: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    known = {f.name for f in fields(MatchConfig)}
    for key, value in table.items():
        if key not in known:
            errors.append(f'unknown key {key!r}')
            continue
        expected = _EXPECTED_TYPES[key]
        # bool is an int subclass; do not accept it for numeric keys.
        if not isinstance(value, expected) or (bool not in expected and isinstance(value, bool)):
            errors.append(f'{key}: expected {" or ".join(t.__name__ for t in expected)}, got {type(value).__name__}')
            continue
        if key in ('confidence', 'exact_threshold') and not 0.0 <= value <= 1.0:
            errors.append(f'{key}: must be between 0 and 1, got {value}')
        if key == 'exclude' and not all(isinstance(p, str) for p in value):
            errors.append('exclude: all entries must be strings')
    return errors


def _read_table(path: Path) -> dict[str, Any]:
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ConfigError([f'{path}: {exc}']) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError([f'{path}: invalid TOML: {exc}']) from exc

    if path.name == _PYPROJECT:
        tool = data.get('tool', {})
        if not isinstance(tool, dict):
            raise ConfigError([f'{path}: expected [tool] to be a table, got {type(tool).__name__}'])
        table = tool.get('licensematch', {})
    else:
        table = data
    if not isinstance(table, dict):
        raise ConfigError([f'{path}: expected a table, got {type(table).__name__}'])
    return table


def load_config(path: Path | None = None) -> MatchConfig:
    """Load settings from *path*.

    Args:
        path: A ``licensematch.toml`` file or a ``pyproject.toml``
            holding a ``[tool.licensematch]`` table.  ``None`` returns
            the defaults.

    Returns:
        The validated :class:`MatchConfig`.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    if path is None:
        return MatchConfig()

    table = _read_table(path)
    errors = _validate(table)
    if errors:
        raise ConfigError([f'{path}: {e}' for e in errors])

    templates_dir = table.get('templates_dir', '')
    config = MatchConfig(
        confidence=float(table.get('confidence', MatchConfig.confidence)),
        exact_threshold=float(table.get('exact_threshold', MatchConfig.exact_threshold)),
        show_words=table.get('show_words', MatchConfig.show_words),
        group=table.get('group', MatchConfig.group),
        templates_dir=(path.parent / templates_dir) if templates_dir else None,
        exclude=tuple(table.get('exclude', ())),
    )
    logger.debug('config_loaded', path=str(path))
    return config


def find_config(start: Path) -> Path | None:
    """Search *start* and its parents for a configuration file.

    ``licensematch.toml`` wins over ``pyproject.toml`` in the same
    directory; a ``pyproject.toml`` only counts when it has a
    ``[tool.licensematch]`` table.
    """
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / _PYPROJECT
        if pyproject.is_file():
            try:
                with pyproject.open('rb') as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            tool = data.get('tool')
            if isinstance(tool, dict) and 'licensematch' in tool:
                return pyproject
    return None


def _add_defaults(table: tomlkit.items.Table | tomlkit.TOMLDocument) -> None:
    defaults = MatchConfig()
    table.add('confidence', tomlkit.item(defaults.confidence).comment('minimum score to name a license'))
    table.add('exact_threshold', tomlkit.item(defaults.exact_threshold).comment('above this, no percentage is shown'))
    table.add('show_words', defaults.show_words)
    table.add('group', tomlkit.item(defaults.group).comment('merge packages sharing a license file'))
    table.add('templates_dir', '')
    table.add('exclude', tomlkit.array())


def write_default_config(path: Path) -> bool:
    """Write the default settings to *path*.

    For a ``pyproject.toml`` the ``[tool.licensematch]`` table is added
    with ``tomlkit`` so existing content and comments are preserved.
    Any other path is written as a standalone ``licensematch.toml``.

    Returns:
        ``True`` if the file was written, ``False`` if settings were
        already present.

    Raises:
        ConfigError: If *path* cannot be read or written.
    """
    try:
        if path.name == _PYPROJECT:
            doc = tomlkit.parse(path.read_text(encoding='utf-8')) if path.exists() else tomlkit.document()
            tool = doc.get('tool')
            if tool is None:
                tool = tomlkit.table(is_super_table=True)
                doc.add('tool', tool)
            elif not isinstance(tool, Mapping):
                raise ConfigError([f'{path}: expected [tool] to be a table, got {type(tool).__name__}'])
            if 'licensematch' in tool:
                return False
            settings = tomlkit.table()
            _add_defaults(settings)
            tool.add('licensematch', settings)
        else:
            if path.exists():
                return False
            doc = tomlkit.document()
            doc.add(tomlkit.comment('licensematch settings'))
            _add_defaults(doc)
        path.write_text(tomlkit.dumps(doc), encoding='utf-8')
    except OSError as exc:
        raise ConfigError([f'{path}: {exc}']) from exc
    except ParseError as exc:
        raise ConfigError([f'{path}: invalid TOML: {exc}']) from exc
    logger.info('config_written', path=str(path))
    return True
