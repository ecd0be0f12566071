# SPDX-License-Identifier: MIT
"""Semantic version classification for module versions.

Module versions are ``v``-prefixed SemVer 2.0.0 strings. Each one is exactly
one of three shapes:

- Release: ``v1.2.3``
- Pre-release: ``v1.2.3-alpha.1``
- Pseudo-version: ``v1.0.0-20190311183353-d8887717615a``, a synthesized
  pre-release naming an untagged commit by timestamp and commit hash.

Independently of the shape, build metadata of exactly ``+incompatible`` marks
a v2+ release of a module that never adopted a versioned module path.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import MalformedVersionError

if TYPE_CHECKING:
    from .models import RawVersion

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
# \Z rather than $, which also matches before a trailing newline.
SEMVER_PATTERN = re.compile(
    r"^v(?P<major>0|[1-9]\d*)"
    r"\.(?P<minor>0|[1-9]\d*)"
    r"\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?\Z",
    re.ASCII,
)

# The three pseudo-version forms:
#   vX.0.0-yyyymmddhhmmss-abcdefabcdef        (no earlier tag)
#   vX.Y.(Z+1)-0.yyyymmddhhmmss-abcdefabcdef  (built on release vX.Y.Z)
#   vX.Y.Z-pre.0.yyyymmddhhmmss-abcdefabcdef  (built on pre-release vX.Y.Z-pre)
PSEUDO_PATTERN = re.compile(
    r"^(?P<base>v\d+\.(?:0\.0(?=-)|\d+\.\d+-(?:[^+]*\.)?0(?=\.)))[-.]"
    r"(?P<timestamp>\d{14})-(?P<hash>[A-Za-z0-9]+)"
    r"(?:\+incompatible)?\Z",
    re.ASCII,
)

INCOMPATIBLE = "incompatible"


class VersionKind(enum.Enum):
    """Shape of a version string, decided once at classification time."""

    RELEASE = "release"
    PRERELEASE = "prerelease"
    PSEUDO = "pseudo"


@dataclass(frozen=True, slots=True)
class ClassifiedVersion:
    """A parsed and classified module version.

    Attributes:
        version: The original version string
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        prerelease: Pre-release identifier without the leading dash, or ""
        build: Build metadata without the leading plus, or ""
        kind: Release, pre-release or pseudo-version
        pseudo_base: For pseudo-versions, the version before the timestamp
        pseudo_hash: For pseudo-versions, the commit identifier
        incompatible: True iff the build metadata is exactly "incompatible"
        raw: The input record this version was classified from, if any
    """

    version: str
    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""
    kind: VersionKind = VersionKind.RELEASE
    pseudo_base: str = ""
    pseudo_hash: str = ""
    incompatible: bool = False
    raw: Optional["RawVersion"] = None

    def __str__(self) -> str:
        return self.version

    @property
    def is_release(self) -> bool:
        return self.kind is VersionKind.RELEASE

    @property
    def is_prerelease(self) -> bool:
        return self.kind is VersionKind.PRERELEASE

    @property
    def is_pseudo(self) -> bool:
        return self.kind is VersionKind.PSEUDO

    @property
    def base_version(self) -> str:
        """Return ``vMAJOR.MINOR.PATCH`` without pre-release or build metadata."""
        return f"v{self.major}.{self.minor}.{self.patch}"

    @property
    def major_label(self) -> str:
        """Return the major version label, e.g. ``v2``."""
        return f"v{self.major}"


def is_pseudo_version(version: str) -> bool:
    """Report whether a valid version string has the pseudo-version shape.

    Examples:
        >>> is_pseudo_version("v1.0.0-20190311183353-d8887717615a")
        True
        >>> is_pseudo_version("v1.2.3-20190311183353-d8887717615a")
        False
    """
    return version.count("-") >= 2 and PSEUDO_PATTERN.match(version) is not None


def classify(version: str, raw: Optional["RawVersion"] = None) -> ClassifiedVersion:
    """Parse and classify a module version string.

    Args:
        version: A ``v``-prefixed semantic version string
        raw: The record the version came from, carried through untouched

    Returns:
        A ClassifiedVersion

    Raises:
        MalformedVersionError: If the string is not valid semantic version syntax

    Examples:
        >>> classify("v1.2.3").kind
        <VersionKind.RELEASE: 'release'>
        >>> cv = classify("v1.2.4-0.20190311183353-d8887717615a")
        >>> cv.pseudo_base, cv.pseudo_hash
        ('v1.2.4-0', 'd8887717615a')
    """
    if not isinstance(version, str):
        raise MalformedVersionError(
            str(version), f"Version must be a string, got {type(version).__name__}"
        )
    if not version:
        raise MalformedVersionError(version, "Version string cannot be empty")

    match = SEMVER_PATTERN.match(version)
    if not match:
        raise MalformedVersionError(version)

    prerelease = match.group("prerelease") or ""
    build = match.group("buildmetadata") or ""
    pseudo_base = pseudo_hash = ""

    pseudo = PSEUDO_PATTERN.match(version) if version.count("-") >= 2 else None
    if pseudo is not None:
        kind = VersionKind.PSEUDO
        pseudo_base = pseudo.group("base")
        pseudo_hash = pseudo.group("hash")
    elif prerelease:
        kind = VersionKind.PRERELEASE
    else:
        kind = VersionKind.RELEASE

    return ClassifiedVersion(
        version=version,
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease=prerelease,
        build=build,
        kind=kind,
        pseudo_base=pseudo_base,
        pseudo_hash=pseudo_hash,
        incompatible=build == INCOMPATIBLE,
        raw=raw,
    )


def is_valid_version(version: str) -> bool:
    """Check if a string is a valid ``v``-prefixed semantic version.

    Examples:
        >>> is_valid_version("v1.0.0")
        True
        >>> is_valid_version("1.0.0")
        False
    """
    if not isinstance(version, str):
        return False
    return SEMVER_PATTERN.match(version) is not None


def major(version: str) -> str:
    """Return the major version prefix, e.g. ``v2`` for ``v2.1.0+incompatible``."""
    return classify(version).major_label


def major_minor(version: str) -> str:
    """Return the ``vMAJOR.MINOR`` prefix of a version."""
    cv = classify(version)
    return f"v{cv.major}.{cv.minor}"


def prerelease(version: str) -> str:
    """Return the pre-release suffix including the leading dash, or ""."""
    cv = classify(version)
    return f"-{cv.prerelease}" if cv.prerelease else ""
