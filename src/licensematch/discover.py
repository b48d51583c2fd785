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

"""Locate license files for the packages under inspection.

Two package sources are supported:

- **Directory trees** (vendored dependencies, ``site-packages``,
  ``node_modules``, ...): every sub-directory holding files is a
  package named by its ``/``-separated path relative to the root.  Its
  license is the best-named license file in the directory or, failing
  that, in the closest parent below the root.  The root itself is not
  searched: sibling packages cannot share a license they do not own.
- **Debian packages**: ``/usr/share/doc/<package>/copyright``.

File names are ranked by how likely they hold a license::

    LICENSE, LICENCE, UNLICENSE            1.0
    LICENSE.md, LICENSE.txt, ...           0.9
    COPYING, COPYRIGHT (any extension)     0.8
    LICENSE.<anything else>                0.7
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Final

__all__ = [
    'DEBIAN_DOC_ROOT',
    'find_license',
    'iter_debian_packages',
    'iter_packages',
    'score_license_name',
]

DEBIAN_DOC_ROOT: Final[Path] = Path('/usr/share/doc')

_LICENSE_NAME_RE: Final[re.Pattern[str]] = re.compile(
    r'^(?:'
    r'((?:un)?licen[sc]e)|'
    r'((?:un)?licen[sc]e\.(?:md|markdown|txt))|'
    r'(copy(?:ing|right)(?:\.[^.]+)?)|'
    r'(licen[sc]e\.[^.]+)'
    r')$',
    re.IGNORECASE,
)

_GROUP_SCORES: Final[tuple[float, ...]] = (1.0, 0.9, 0.8, 0.7)


def score_license_name(name: str) -> float:
    """Return how likely a file called *name* holds a license (0 to 1)."""
    m = _LICENSE_NAME_RE.match(name)
    if m is None:
        return 0.0
    for group, score in zip(m.groups(), _GROUP_SCORES):
        if group:
            return score
    return 0.0


def _best_in(directory: Path) -> Path | None:
    best: Path | None = None
    best_score = 0.0
    try:
        children = sorted(directory.iterdir())
    except FileNotFoundError:
        return None
    for child in children:
        score = score_license_name(child.name)
        if score > best_score and child.is_file():
            best, best_score = child, score
    return best


def find_license(directory: Path, *, stop_at: Path | None = None) -> str:
    """Return the path of the license file for *directory*.

    Args:
        directory: Package directory to inspect.
        stop_at: When given, parent directories of *directory* that
            lie strictly below *stop_at* are searched too.

    Returns:
        The license file path as a string, ``""`` if none was found.

    Raises:
        OSError: If a directory exists but cannot be listed.
    """
    current = directory
    while True:
        best = _best_in(current)
        if best is not None:
            return str(best)
        parent = current.parent
        if stop_at is None or parent == current or parent == stop_at or stop_at not in parent.parents:
            return ''
        current = parent


def _raise(exc: OSError) -> None:
    raise exc


def iter_packages(root: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(package_id, directory)`` for each package under *root*.

    A package is any non-hidden sub-directory holding at least one
    regular file.  Identifiers use ``/`` regardless of platform.

    Raises:
        OSError: If *root* or one of its sub-directories cannot be
            listed, including when *root* is missing or a file.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith('.'))
        current = Path(dirpath)
        if current == root:
            continue
        if any((current / name).is_file() for name in filenames):
            yield current.relative_to(root).as_posix(), current


def iter_debian_packages(doc_root: Path = DEBIAN_DOC_ROOT) -> Iterator[tuple[str, Path]]:
    """Yield ``(package, copyright_path)`` for each Debian doc directory.

    The copyright path is returned even when the file is absent so the
    caller can report the package as unknown.

    Raises:
        OSError: If *doc_root* cannot be listed.
    """
    for entry in sorted(doc_root.iterdir()):
        if entry.is_dir():
            yield entry.name, entry / 'copyright'
