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

"""Exceptions raised by licensematch.

Only I/O failures and broken invariants surface as exceptions.  A
document that matches nothing is a normal :class:`MatchResult`, and a
malformed template degrades to empty metadata.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    'AggregationConflict',
    'ConfigError',
    'CorpusReadError',
    'DiscoveryError',
    'LicenseMatchError',
]


class LicenseMatchError(Exception):
    """Base class for all licensematch errors."""


class CorpusReadError(LicenseMatchError):
    """Raised when a template blob cannot be read.

    Attributes:
        name: Name of the blob that failed.
        cause: The underlying exception.
    """

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f'could not read license template {name!r}: {cause}')


class AggregationConflict(LicenseMatchError):
    """Raised when packages share a license file but no path prefix.

    Attributes:
        path: The shared license file path.
        packages: Identifiers of every package sharing *path*.
    """

    def __init__(self, path: str, packages: Sequence[str]) -> None:
        self.path = path
        self.packages = tuple(packages)
        super().__init__(
            f'packages share the same license {path!r} but no common prefix: {", ".join(self.packages)}'
        )


class ConfigError(LicenseMatchError):
    """Raised when the configuration file is unreadable or invalid.

    Attributes:
        errors: List of human-readable error strings.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        bullet_list = '\n'.join(f'  - {e}' for e in errors)
        super().__init__(f'Configuration has {len(errors)} error(s):\n{bullet_list}')


class DiscoveryError(LicenseMatchError):
    """Raised when a package tree or documentation root cannot be listed.

    Attributes:
        path: The directory that failed.
        cause: The underlying exception.
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f'could not list {path}: {cause}')
