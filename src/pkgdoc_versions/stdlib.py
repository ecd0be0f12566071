# SPDX-License-Identifier: MIT
"""Version naming for the standard library.

The standard library is indexed as a single module (``std`` by default)
whose semantic versions map to Go release tags:

    "go1"          <-> "v1.0.0"
    "go1.2"        <-> "v1.2.0"
    "go1.13beta1"  <-> "v1.13.0-beta.1"
    "go1.21.0"     <-> "v1.21.0"

Pseudo-versions of the standard library are development builds and map to
the development branch.
"""

from __future__ import annotations

import re
from typing import Optional

from .compare import compare_versions
from .config import StdlibConfig
from .errors import MalformedVersionError
from .semver import classify

# Groups: major.minor, patch (or ""), whole prerelease, prerelease type, number
TAG_PATTERN = re.compile(r"^go(\d+\.\d+)(\.\d+|)((beta|rc)(\d+))?\Z", re.ASCII)
_SHORT_VERSION = re.compile(r"^v(0|[1-9]\d*)(?:\.(0|[1-9]\d*))?\Z", re.ASCII)

# From go1.21.0 on, the first release of a minor version keeps its ".0".
_FULL_PATCH_SINCE = "v1.21.0"

_DEFAULT = StdlibConfig()


def version_for_tag(tag: str, config: Optional[StdlibConfig] = None) -> str:
    """Return the semantic version for a Go tag, or "" if it is not a release tag.

    Branch names such as "master" are returned unchanged.

    Examples:
        >>> version_for_tag("go1.13beta1")
        'v1.13.0-beta.1'
        >>> version_for_tag("go1.9rc2")
        'v1.9.0-rc.2'
    """
    config = config or _DEFAULT
    if tag == "go1":
        return "v1.0.0"
    if tag == "go1.0":
        return ""
    if tag in config.dev_branches:
        return tag
    m = TAG_PATTERN.match(tag)
    if m is None:
        return ""
    version = "v" + m.group(1) + (m.group(2) or ".0")
    if m.group(3):
        version += f"-{m.group(4)}.{m.group(5)}"
    return version


def release_version_for_tag(tag: str) -> str:
    """Like version_for_tag, but returns "" for beta and rc tags."""
    m = TAG_PATTERN.match(tag)
    if m is None or m.group(3):
        return ""
    return "v" + m.group(1) + (m.group(2) or ".0")


def expand_short_version(version: str) -> str:
    """Expand "vX" and "vX.Y" to "vX.Y.0"; other strings are returned unchanged."""
    m = _SHORT_VERSION.match(version)
    if m:
        return f"v{m.group(1)}.{m.group(2) or 0}.0"
    return version


def _final_digits_index(s: str) -> int:
    """Return the index of the run of digits ending s, or -1 if s doesn't end in one."""
    i = len(s)
    while i > 0 and s[i - 1].isdigit():
        i -= 1
    return -1 if i == len(s) else i


def tag_for_version(version: str, config: Optional[StdlibConfig] = None) -> str:
    """Return the Go repository tag for a standard library version.

    Raises:
        MalformedVersionError: If the version is not valid, or its pre-release
            cannot be expressed as a Go tag (final digits must follow a period)

    Examples:
        >>> tag_for_version("v1.12.5")
        'go1.12.5'
        >>> tag_for_version("v1.13.0-beta.1")
        'go1.13beta1'
    """
    config = config or _DEFAULT
    if version in config.dev_branches:
        return version
    if version.startswith("v0.0.0"):
        return config.dev_label
    if version == "v1.0.0":
        return "go1"

    cv = classify(expand_short_version(version))
    go_version = f"{cv.major}.{cv.minor}"
    if cv.patch != 0 or (
        not cv.prerelease and compare_versions(cv.base_version, _FULL_PATCH_SINCE) >= 0
    ):
        go_version += f".{cv.patch}"
    tag = "go" + go_version

    prerelease = cv.prerelease
    if prerelease:
        # Go tags read "beta1", which would sort beta10 before beta9, so
        # only the dotted form "beta.1" is accepted.
        i = _final_digits_index(prerelease)
        if i == 0 or (i > 0 and prerelease[i - 1] != "."):
            raise MalformedVersionError(
                version, f"final digits in a prerelease must follow a period: {version!r}"
            )
        if i > 0:
            prerelease = prerelease[: i - 1] + prerelease[i:]
        tag += prerelease
    return tag


def major_version_for_version(version: str, config: Optional[StdlibConfig] = None) -> str:
    """Return the standard library epoch label for a version, e.g. "go1".

    Examples:
        >>> major_version_for_version("v1.13.3")
        'go1'
    """
    config = config or _DEFAULT
    tag = tag_for_version(version, config)
    if tag == "go1" or tag == config.dev_label or tag in config.dev_branches:
        return config.major_label_prefix + "1"
    number, dot, _ = tag[len("go"):].partition(".")
    if not dot:
        raise MalformedVersionError(version, f"no '.' in go tag {tag!r}")
    return config.major_label_prefix + number
