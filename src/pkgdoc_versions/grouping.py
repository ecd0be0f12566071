# SPDX-License-Identifier: MIT
"""Bucketing of classified versions by module epoch.

Every version of the queried unit lands in exactly one bucket:

- this module: versions of the target module path, keyed by major version
- incompatible: "+incompatible" versions of the target module path, kept
  apart because they predate versioned module paths
- other modules: versions of a different module path whose unit sits at the
  same series-relative path (forks, or ``example.com/foo`` vs
  ``example.com/foo/v2``); only the distinct module paths are returned

Versions of other modules whose unit does not belong to the queried series
are excluded and reported as mismatched.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .config import DEFAULT_CONFIG, VersionsConfig
from .models import VersionGroupKey
from .semver import ClassifiedVersion

logger = logging.getLogger(__name__)

_MAJOR_SUFFIX = re.compile(r"/v([2-9]|[1-9]\d+)$", re.ASCII)


def series_path(module_path: str) -> str:
    """Return the module path without its major version suffix.

    Examples:
        >>> series_path("example.com/foo/v2")
        'example.com/foo'
        >>> series_path("example.com/foo")
        'example.com/foo'
    """
    return _MAJOR_SUFFIX.sub("", module_path)


def v1_path(path: str, module_path: str) -> str:
    """Return the path of a unit with its module's major version suffix removed.

    Examples:
        >>> v1_path("example.com/foo/v2/bar", "example.com/foo/v2")
        'example.com/foo/bar'
    """
    if path != module_path and not path.startswith(module_path + "/"):
        # Not inside the module; the standard library's packages are like this.
        return path
    return series_path(module_path) + path[len(module_path):]


def path_in_version(v1: str, module_path: str) -> str:
    """Return the path of the unit v1 inside the module at module_path.

    Examples:
        >>> path_in_version("foo.com/bar/baz", "foo.com/bar/v2")
        'foo.com/bar/v2/baz'
        >>> path_in_version("foo.com/bar/baz", "foo.com/v3")
        'foo.com/v3/bar/baz'
    """
    series = series_path(module_path)
    if v1 == series:
        return module_path
    if not v1.startswith(series + "/"):
        return v1
    return module_path + v1[len(series):]


@dataclass
class Grouping:
    """Result of grouping the versions of one unit.

    Attributes:
        this_module: Versions of the target module by epoch key
        incompatible: "+incompatible" versions of the target module by epoch key
        other_modules: Sorted, distinct paths of other modules in the series
        mismatched: Versions excluded because they belong to another series
    """

    this_module: dict[VersionGroupKey, list[ClassifiedVersion]] = field(default_factory=dict)
    incompatible: dict[VersionGroupKey, list[ClassifiedVersion]] = field(default_factory=dict)
    other_modules: list[str] = field(default_factory=list)
    mismatched: list[ClassifiedVersion] = field(default_factory=list)


class EpochGrouper:
    """Groups classified versions into epochs of the target module."""

    def __init__(self, config: Optional[VersionsConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def major_label(self, module_path: str, cv: ClassifiedVersion) -> str:
        """Return the epoch label of a version within module_path."""
        stdlib = self.config.stdlib
        if stdlib.is_stdlib(module_path):
            if cv.is_pseudo:
                return stdlib.dev_label
            return f"{stdlib.major_label_prefix}{cv.major}"
        return cv.major_label

    def group(
        self,
        target_module_path: str,
        unit_path: str,
        versions: Iterable[ClassifiedVersion],
    ) -> Grouping:
        """Bucket versions of the unit at unit_path relative to target_module_path.

        Args:
            target_module_path: Module path of the page being viewed
            unit_path: Path of the queried package or directory
            versions: Classified versions, each carrying its RawVersion

        Returns:
            A Grouping. Empty input gives an empty Grouping.

        Raises:
            ValueError: If a version has no RawVersion attached
        """
        result = Grouping()
        series = v1_path(unit_path, target_module_path)
        others: set[str] = set()

        for cv in versions:
            raw = cv.raw
            if raw is None:
                raise ValueError(f"version {cv.version!r} has no source record")

            if raw.module_path == target_module_path:
                key = VersionGroupKey(
                    module_path=raw.module_path,
                    major=self.major_label(raw.module_path, cv),
                    incompatible=cv.incompatible,
                )
                bucket = result.incompatible if cv.incompatible else result.this_module
                bucket.setdefault(key, []).append(cv)
            elif v1_path(raw.unit_path, raw.module_path) == series:
                others.add(raw.module_path)
            else:
                logger.warning(
                    "got version with mismatching series: %s@%s (unit %s)",
                    raw.module_path,
                    cv.version,
                    raw.unit_path,
                )
                result.mismatched.append(cv)

        result.other_modules = sorted(others)
        return result
