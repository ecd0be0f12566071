# SPDX-License-Identifier: MIT
"""Version ordering following SemVer 2.0.0 precedence.

Pre-release identifiers compare numerically when both are numeric and in
ASCII order otherwise; numeric identifiers sort before alphanumeric ones and
a release sorts after all of its pre-releases. Pseudo-versions are
pre-releases whose identifiers embed a fixed-width timestamp, so they order
by commit time. Build metadata never affects precedence.
"""

from __future__ import annotations

from typing import Union

from .semver import ClassifiedVersion, classify

VersionLike = Union[str, ClassifiedVersion]


def _coerce(version: VersionLike) -> ClassifiedVersion:
    return classify(version) if isinstance(version, str) else version


def _prerelease_key(prerelease: str) -> tuple:
    """Return a sort key for a pre-release string ("" for a release).

    A release maps to (1,) and sorts after every pre-release (0, parts).
    Numeric identifiers map to (0, n, "") and alphanumeric ones to
    (1, 0, s), so numbers sort first and compare numerically; tuple order
    puts a shorter identifier list first when it is a prefix of a longer one.
    """
    if not prerelease:
        return (1,)
    parts = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in prerelease.split(".")
    )
    return (0, parts)


def _compare_prerelease(pre1: str, pre2: str) -> int:
    """Compare two pre-release strings, returning -1, 0 or 1."""
    key1, key2 = _prerelease_key(pre1), _prerelease_key(pre2)
    return (key1 > key2) - (key1 < key2)


def compare_versions(version1: VersionLike, version2: VersionLike) -> int:
    """Compare two module versions by SemVer precedence.

    Args:
        version1: First version (string or ClassifiedVersion)
        version2: Second version (string or ClassifiedVersion)

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        MalformedVersionError: If either version string is invalid

    Examples:
        >>> compare_versions("v1.0.0", "v2.0.0")
        -1
        >>> compare_versions("v1.0.0-rc.1", "v1.0.0")
        -1
        >>> compare_versions("v2.1.0+incompatible", "v2.1.0")
        0
    """
    v1 = _coerce(version1)
    v2 = _coerce(version2)

    core1 = (v1.major, v1.minor, v1.patch)
    core2 = (v2.major, v2.minor, v2.patch)
    if core1 != core2:
        return -1 if core1 < core2 else 1
    return _compare_prerelease(v1.prerelease, v2.prerelease)


def version_key(version: VersionLike) -> tuple:
    """Return a sort key for a version, consistent with compare_versions.

    Build metadata is appended as a final component. It never changes the
    relative order of versions with different precedence, but it keeps keys
    of distinct version strings distinct.

    Examples:
        >>> sorted(["v1.0.0", "v2.0.0", "v1.0.0-alpha"], key=version_key)
        ['v1.0.0-alpha', 'v1.0.0', 'v2.0.0']
    """
    v = _coerce(version)
    return (v.major, v.minor, v.patch, _prerelease_key(v.prerelease), v.build)


def sort_newest_first(versions: list[ClassifiedVersion]) -> list[ClassifiedVersion]:
    """Return versions ordered from highest to lowest precedence."""
    return sorted(versions, key=version_key, reverse=True)


def _numeric_prefix(n: int) -> str:
    """Return a prefix that makes n-digit numbers sort after shorter ones.

    One digit gets no prefix; every additional digit advances one letter,
    and each full run of 26 contributes a ``z``.
    """
    z, remainder = divmod(n - 1, 26)
    prefix = "z" * z
    if remainder:
        prefix += chr(ord("a") + remainder - 1)
    return prefix


def _numeric(digits: str) -> str:
    return _numeric_prefix(len(digits)) + digits


def for_sorting(version: str) -> str:
    """Return a string whose lexicographic order matches version precedence.

    Datastores that sort versions with plain string comparison store this
    value alongside the version. Numeric components are prefixed by a
    length marker, non-numeric pre-release components by ``~``, and
    releases end in ``~`` so they sort after their pre-releases.

    Raises:
        MalformedVersionError: If the version string is invalid

    Examples:
        >>> for_sorting("v1.2.3")
        '1,2,3~'
        >>> for_sorting("v12.48.301")
        'a12,a48,b301~'
        >>> for_sorting("v0.9.3-alpha.1")
        '0,9,3,~alpha,1'
    """
    cv = classify(version)
    key = ",".join(_numeric(str(n)) for n in (cv.major, cv.minor, cv.patch))
    if not cv.prerelease:
        return key + "~"
    parts = []
    for part in cv.prerelease.split("."):
        parts.append(_numeric(part) if part.isdigit() else "~" + part)
    return key + "," + ",".join(parts)
