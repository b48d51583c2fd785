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

"""Collapse packages that resolved to the same license file.

Large package families (``github.com/blevesearch/bleve/...``) usually
ship a single LICENSE at their root.  Listing every sub-package is
noise, so entries sharing a license path are merged into one entry
named after the longest common prefix of their identifiers::

    a/b/c ─┐
    a/b/d ─┼─→ a/b     (all three point at a/b/LICENSE)
    a/b/e ─┘

The prefix is computed over ``/``-separated components, never
characters: ``foo/bar`` and ``foo/baz`` share ``foo``, not ``foo/ba``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from licensematch._types import LicenseEntry
from licensematch.errors import AggregationConflict
from licensematch.logging import get_logger

__all__ = [
    'group',
    'longest_common_prefix',
]

logger = get_logger(__name__)

_SEP = '/'


class _PrefixNode:
    """A node of the package-path prefix tree."""

    __slots__ = ('name', 'children', 'terminal')

    def __init__(self, name: str = '') -> None:
        self.name = name
        self.children: dict[str, _PrefixNode] = {}
        self.terminal = False  # a package identifier ends here


def longest_common_prefix(packages: Iterable[str]) -> str:
    """Return the longest common ``/``-separated prefix of *packages*.

    Builds a prefix tree of every split identifier, then walks down
    from the root for as long as each node has exactly one child and
    no identifier ends there (``a/b`` and ``a/b/c`` share ``a/b``).

    Returns:
        The shared leading components joined by ``/``.  Empty when the
        identifiers have no leading component in common.
    """
    root = _PrefixNode()
    for package in packages:
        node = root
        for part in package.split(_SEP):
            child = node.children.get(part)
            if child is None:
                child = node.children[part] = _PrefixNode(part)
            node = child
        node.terminal = True

    # Stopping at a terminal node makes a package the prefix of its own
    # sub-packages: {a/b, a/b/c} gives a/b, where a plain single-child
    # walk would descend to a/b/c.
    prefix: list[str] = []
    node = root
    while len(node.children) == 1 and not node.terminal:
        node = next(iter(node.children.values()))
        prefix.append(node.name)
    return _SEP.join(prefix)


def group(entries: Sequence[LicenseEntry]) -> list[LicenseEntry]:
    """Merge entries that share a license file path.

    Args:
        entries: One entry per inspected package.

    Returns:
        Entries in their original order.  Each set of entries sharing a
        non-empty ``path`` is replaced, at the position of its first
        member, by that member renamed to the common package prefix.
        Entries without a path are kept as they are.

    Raises:
        AggregationConflict: If entries share a path but their package
            identifiers have no common leading component.
    """
    by_path: dict[str, list[LicenseEntry]] = {}
    for entry in entries:
        if entry.path:
            by_path.setdefault(entry.path, []).append(entry)

    merged: dict[str, LicenseEntry] = {}
    for path, members in by_path.items():
        if len(members) == 1:
            merged[path] = members[0]
            continue
        packages = [m.package for m in members]
        prefix = longest_common_prefix(packages)
        if not prefix:
            raise AggregationConflict(path, packages)
        merged[path] = replace(members[0], package=prefix)
        logger.debug('licenses_grouped', path=path, package=prefix, count=len(members))

    kept: list[LicenseEntry] = []
    for entry in entries:
        if not entry.path:
            kept.append(entry)
            continue
        representative = merged.pop(entry.path, None)
        if representative is not None:
            kept.append(representative)
    return kept
