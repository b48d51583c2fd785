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

"""Match the license file of every inspected package.

Data Flow::

    ┌──────────────┐     ┌──────────────┐     ┌──────────────┐
    │ discover     │────→│ read + match │────→│ LicenseEntry │
    │ (pkg, path)  │     │ (cached by   │     │ per package  │
    └──────────────┘     │  path)       │     └──────────────┘
                         └──────────────┘

Many sub-packages of one project resolve to the same LICENSE file, so
each distinct path is read and matched only once.

Usage::

    from licensematch.audit import audit_directory
    from licensematch.templates import load_bundled_templates

    entries = audit_directory(Path('vendor'), load_bundled_templates())
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Sequence
from pathlib import Path

from licensematch._types import LicenseEntry, MatchResult, Template
from licensematch.discover import DEBIAN_DOC_ROOT, find_license, iter_debian_packages, iter_packages
from licensematch.errors import DiscoveryError
from licensematch.logging import get_logger
from licensematch.matcher import match_document

__all__ = [
    'audit_debian',
    'audit_directory',
    'audit_packages',
    'is_excluded',
]

logger = get_logger(__name__)


def is_excluded(package: str, patterns: Iterable[str]) -> bool:
    """Return ``True`` if *package* matches any ``fnmatch`` pattern."""
    return any(fnmatch.fnmatchcase(package, p) for p in patterns)


def audit_packages(
    packages: Iterable[tuple[str, str]],
    templates: Sequence[Template],
) -> list[LicenseEntry]:
    """Match the license file of each ``(package, path)`` pair.

    Args:
        packages: Package identifiers with their license file path
            (``""`` when no file was found).
        templates: Template corpus to match against.

    Returns:
        One :class:`LicenseEntry` per package, in input order.  A file
        that cannot be read yields an entry with ``error`` set.
    """
    matched: dict[str, MatchResult | str] = {}
    entries: list[LicenseEntry] = []
    for package, path in packages:
        if not path:
            entries.append(LicenseEntry(package=package))
            continue

        outcome = matched.get(path)
        if outcome is None:
            try:
                data = Path(path).read_bytes()
            except OSError as exc:
                logger.warning('license_read_failed', package=package, path=path, error=str(exc))
                outcome = f'could not read {path}: {exc.strerror or exc}'
            else:
                outcome = match_document(data, templates)
                logger.debug(
                    'license_matched',
                    path=path,
                    template=outcome.template.title if outcome.template else None,
                    score=round(outcome.score, 4),
                )
            matched[path] = outcome

        if isinstance(outcome, str):
            entries.append(LicenseEntry(package=package, path=path, error=outcome))
        else:
            entries.append(LicenseEntry(package=package, path=path, result=outcome))
    return entries


def audit_directory(
    root: Path,
    templates: Sequence[Template],
    *,
    exclude: Iterable[str] = (),
) -> list[LicenseEntry]:
    """Audit every package found under *root*.

    Packages without a license file of their own inherit the closest
    one found in a parent directory below *root*.

    Raises:
        DiscoveryError: If *root* is missing, is not a directory, or
            one of its directories cannot be listed.
    """
    root = root.resolve()
    patterns = tuple(exclude)
    packages: list[tuple[str, str]] = []
    try:
        for package, directory in iter_packages(root):
            if is_excluded(package, patterns):
                logger.debug('package_excluded', package=package)
                continue
            packages.append((package, find_license(directory, stop_at=root)))
    except OSError as exc:
        raise DiscoveryError(exc.filename or str(root), exc) from exc
    logger.info('packages_discovered', root=str(root), count=len(packages))
    return audit_packages(packages, templates)


def audit_debian(
    templates: Sequence[Template],
    *,
    doc_root: Path = DEBIAN_DOC_ROOT,
    exclude: Iterable[str] = (),
) -> list[LicenseEntry]:
    """Audit the ``copyright`` file of every installed Debian package.

    Raises:
        DiscoveryError: If *doc_root* cannot be listed.
    """
    patterns = tuple(exclude)
    packages: list[tuple[str, str]] = []
    try:
        for package, copyright_path in iter_debian_packages(doc_root):
            if is_excluded(package, patterns):
                continue
            packages.append((package, str(copyright_path) if copyright_path.is_file() else ''))
    except OSError as exc:
        raise DiscoveryError(str(doc_root), exc) from exc
    logger.info('packages_discovered', root=str(doc_root), count=len(packages))
    return audit_packages(packages, templates)
