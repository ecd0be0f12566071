# SPDX-License-Identifier: MIT
"""Construction of VersionsDetails from raw version records."""

from __future__ import annotations

import functools
import logging
from typing import Iterable, Optional

from .builder import Linkify, VersionListBuilder
from .config import DEFAULT_CONFIG, VersionsConfig
from .errors import MalformedVersionError
from .grouping import EpochGrouper, path_in_version, v1_path
from .models import RawVersion, VersionsDetails
from .semver import ClassifiedVersion, classify
from .stdlib import tag_for_version
from .vulns import VulnLookup

logger = logging.getLogger(__name__)


def classify_records(
    versions: Iterable[RawVersion],
) -> tuple[list[ClassifiedVersion], list[RawVersion]]:
    """Classify raw records, setting aside those with malformed versions.

    One bad historical tag must not make the whole tab unavailable, so
    malformed records are logged and returned separately instead of raising.

    Returns:
        A tuple of (classified versions, malformed records)
    """
    classified: list[ClassifiedVersion] = []
    malformed: list[RawVersion] = []
    for raw in versions:
        try:
            classified.append(classify(raw.version, raw))
        except MalformedVersionError as e:
            logger.warning("Skipping %s@%s: %s", raw.module_path, raw.version, e.message)
            malformed.append(raw)
    return classified, malformed


def unit_linkifier(
    target_module_path: str,
    unit_path: str,
    config: Optional[VersionsConfig] = None,
) -> Linkify:
    """Return a linkify callback for the unit at unit_path.

    Links point at the same unit inside each module version, e.g.
    ``/example.com/foo/v2/bar@v2.0.0``. Standard library links use the
    package path and the Go tag, e.g. ``/net/http@go1.12.5``.
    """
    config = config or DEFAULT_CONFIG
    series = v1_path(unit_path, target_module_path)

    def linkify(module_path: str, version: str) -> str:
        if config.stdlib.is_stdlib(module_path):
            return f"/{unit_path}@{tag_for_version(version, config.stdlib)}"
        return f"/{path_in_version(series, module_path)}@{version}"

    return linkify


def versions_details(
    target_module_path: str,
    unit_path: str,
    versions: Iterable[RawVersion],
    linkify: Optional[Linkify] = None,
    vuln_lookup: Optional[VulnLookup] = None,
    config: Optional[VersionsConfig] = None,
) -> VersionsDetails:
    """Build the versions tab for the unit at unit_path.

    Args:
        target_module_path: Module path of the page being viewed
        unit_path: Path of the queried package or directory
        versions: Every known version of every module containing the unit
        linkify: URL callback (defaults to unit_linkifier)
        vuln_lookup: Vulnerability lookup by module path; None disables annotation
        config: Versions configuration

    Returns:
        A VersionsDetails; empty when there are no versions

    Raises:
        CollaboratorError: If linkify or vuln_lookup fails
    """
    config = config or DEFAULT_CONFIG
    if linkify is None:
        linkify = unit_linkifier(target_module_path, unit_path, config)
    if vuln_lookup is not None:
        # Both builds below share one lookup per module path.
        vuln_lookup = functools.lru_cache(maxsize=None)(vuln_lookup)

    classified, malformed = classify_records(versions)
    if malformed:
        logger.warning(
            "Excluded %d malformed version(s) of %s", len(malformed), unit_path
        )

    grouping = EpochGrouper(config).group(target_module_path, unit_path, classified)
    builder = VersionListBuilder(config)
    return VersionsDetails(
        this_module=builder.build(grouping.this_module, linkify, vuln_lookup),
        incompatible_modules=builder.build(grouping.incompatible, linkify, vuln_lookup),
        other_modules=grouping.other_modules,
    )
