# SPDX-License-Identifier: MIT
"""Versions tab builder for a module documentation site.

Takes every known version of a module (or of a package across all modules
that have contained it) and produces the grouped, sorted, human-formatted
version lists shown on the "Versions" tab.

Example:
    >>> from pkgdoc_versions import classify, format_version
    >>>
    >>> cv = classify("v1.0.0-20190311183353-d8887717615a")
    >>> cv.is_pseudo
    True
    >>> format_version(cv)
    'v1.0.0-...-d888771'
"""

__version__ = "0.1.0"

from .semver import (
    ClassifiedVersion,
    VersionKind,
    classify,
    is_pseudo_version,
    is_valid_version,
    SEMVER_PATTERN,
    PSEUDO_PATTERN,
)
from .compare import (
    compare_versions,
    for_sorting,
    version_key,
)
from .config import StdlibConfig, VersionsConfig
from .errors import (
    CollaboratorError,
    ConfigError,
    MalformedVersionError,
    VersionsError,
)
from .formatting import format_commit_time, format_version, format_version_string
from .models import (
    RawVersion,
    VersionGroupKey,
    VersionList,
    VersionSummary,
    VersionsDetails,
    VulnRef,
)
from .grouping import EpochGrouper, Grouping, path_in_version, series_path, v1_path
from .builder import VersionListBuilder
from .details import classify_records, unit_linkifier, versions_details
from .vulns import AffectedRange, RangeEvent, VulnEntry, affects_version

__all__ = [
    # Classification
    "ClassifiedVersion",
    "VersionKind",
    "classify",
    "is_pseudo_version",
    "is_valid_version",
    "SEMVER_PATTERN",
    "PSEUDO_PATTERN",
    # Ordering
    "compare_versions",
    "for_sorting",
    "version_key",
    # Configuration
    "StdlibConfig",
    "VersionsConfig",
    # Errors
    "CollaboratorError",
    "ConfigError",
    "MalformedVersionError",
    "VersionsError",
    # Formatting
    "format_commit_time",
    "format_version",
    "format_version_string",
    # Models
    "RawVersion",
    "VersionGroupKey",
    "VersionList",
    "VersionSummary",
    "VersionsDetails",
    "VulnRef",
    # Grouping and building
    "EpochGrouper",
    "Grouping",
    "path_in_version",
    "series_path",
    "v1_path",
    "VersionListBuilder",
    "classify_records",
    "unit_linkifier",
    "versions_details",
    # Vulnerabilities
    "AffectedRange",
    "RangeEvent",
    "VulnEntry",
    "affects_version",
]
