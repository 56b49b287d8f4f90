# Copyright 2026 TIER IV, inc.
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

"""Version utilities for AIML taxonomy and module versions.

Taxonomy data files and module declarations carry ``MAJOR.MINOR.PATCH``
version strings (e.g. ``2.0.1``).

Taxonomy selection rule:
  * **Major** and **minor** must match the requested version.
  * The exact version is preferred, otherwise the largest available patch.

Module versions are compared against the taxonomy version for reporting only;
any mismatch is advisory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..exceptions import FormatVersionError


# ---- version string → tuple ------------------------------------------------

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``2.0.1`` (with or without 'v' prefix).

    Returns:
        A :class:`SemanticVersion` instance.

    Raises:
        FormatVersionError: If the string cannot be parsed.
    """
    if not isinstance(raw, str):
        raise FormatVersionError(
            f"Version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '2.0.1')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def select_version(requested: str, available: Iterable[str]) -> str:
    """Pick the available version that serves ``requested``.

    Args:
        requested: Requested version string
        available: Version strings that exist (unparsable entries are skipped)

    Returns:
        The exact version when available, otherwise the largest patch with the
        same major and minor version.

    Raises:
        FormatVersionError: If ``requested`` cannot be parsed or nothing matches.
    """
    wanted = parse_format_version(requested)

    candidates = []
    for raw in available:
        try:
            candidate = parse_format_version(raw)
        except FormatVersionError:
            continue
        if candidate == wanted:
            return raw
        if (candidate.major, candidate.minor) == (wanted.major, wanted.minor):
            candidates.append((candidate, raw))

    if not candidates:
        raise FormatVersionError(f"No taxonomy available for version {wanted}")

    return max(candidates)[1]


# ---- compatibility check ----------------------------------------------------


@dataclass(frozen=True)
class VersionCheckResult:
    """Result of comparing a declared version with the current one."""

    current: bool
    message: str
    declared_version: Optional[SemanticVersion] = None
    supported_version: Optional[SemanticVersion] = None


def check_format_version(raw_version: str, supported: str) -> VersionCheckResult:
    """Compare *raw_version* with the *supported* version.

    * Equal strings → current.
    * Unparsable version → not current, message names the parse problem.
    * Major mismatch, older or newer versions → not current, message explains.
    """
    supported_ver = parse_format_version(supported)

    if raw_version == supported:
        return VersionCheckResult(
            current=True,
            message=f"Version {supported} is current.",
            declared_version=supported_ver,
            supported_version=supported_ver,
        )

    try:
        declared = parse_format_version(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(current=False, message=str(exc), supported_version=supported_ver)

    if declared.major != supported_ver.major:
        message = (
            f"Module version {declared} targets major version {declared.major} "
            f"but the taxonomy is {supported_ver}"
        )
    elif declared < supported_ver:
        message = f"Module version {declared} might not be current"
    elif declared > supported_ver:
        message = f"Module version {declared} is newer than the taxonomy version {supported_ver}"
    else:
        # Same numbers, different spelling (e.g. a 'v' prefix).
        message = f"Module version '{raw_version}' should be written as '{supported_ver}'"

    return VersionCheckResult(
        current=False,
        message=message,
        declared_version=declared,
        supported_version=supported_ver,
    )
