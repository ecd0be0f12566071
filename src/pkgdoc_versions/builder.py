# SPDX-License-Identifier: MIT
"""Assembly of sorted, formatted and annotated version lists."""

from __future__ import annotations

import re
from typing import Callable, Mapping, Optional

from .compare import sort_newest_first
from .config import DEFAULT_CONFIG, VersionsConfig
from .errors import CollaboratorError
from .formatting import format_commit_time, format_version
from .models import VersionGroupKey, VersionList, VersionSummary, VulnRef
from .semver import ClassifiedVersion
from .vulns import VulnEntry, VulnLookup, vulns_for_version

Linkify = Callable[[str, str], str]

_TRAILING_NUMBER = re.compile(r"(\d+)$", re.ASCII)


class VersionListBuilder:
    """Builds the ordered VersionLists shown on the versions tab.

    Group order is: the standard library development group first, then
    descending numeric major version ("v10" before "v9"), then module path.
    Entries within a group are newest first.

    URLs come from the ``linkify(module_path, version)`` callback and
    vulnerability entries from ``vuln_lookup(module_path)``, which returns
    every entry for the module; the builder decides per version which
    entries apply using their affected ranges. Any exception raised by a
    callback aborts the build with a CollaboratorError.
    """

    def __init__(self, config: Optional[VersionsConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def is_dev_group(self, key: VersionGroupKey) -> bool:
        stdlib = self.config.stdlib
        return stdlib.is_stdlib(key.module_path) and key.major == stdlib.dev_label

    def group_sort_key(self, key: VersionGroupKey) -> tuple:
        """Return an ascending sort key placing groups in display order."""
        m = _TRAILING_NUMBER.search(key.major)
        number = int(m.group(1)) if m else -1
        return (0 if self.is_dev_group(key) else 1, -number, key.module_path, key.incompatible)

    def build(
        self,
        groups: Mapping[VersionGroupKey, list[ClassifiedVersion]],
        linkify: Linkify,
        vuln_lookup: Optional[VulnLookup] = None,
    ) -> list[VersionList]:
        """Sort groups and their versions and render each version.

        Args:
            groups: Classified versions by group key
            linkify: Returns the URL for (module_path, version)
            vuln_lookup: Returns all vulnerability entries for a module path

        Returns:
            VersionLists in display order

        Raises:
            CollaboratorError: If linkify or vuln_lookup raises
        """
        vuln_cache: dict[str, list[VulnEntry]] = {}
        lists = []
        for key in sorted(groups, key=self.group_sort_key):
            entries = [
                self._summary(key, cv, linkify, vuln_lookup, vuln_cache)
                for cv in sort_newest_first(groups[key])
            ]
            lists.append(VersionList(key=key, entries=entries))
        return lists

    def _summary(
        self,
        key: VersionGroupKey,
        cv: ClassifiedVersion,
        linkify: Linkify,
        vuln_lookup: Optional[VulnLookup],
        vuln_cache: dict[str, list[VulnEntry]],
    ) -> VersionSummary:
        try:
            link = linkify(key.module_path, cv.version)
        except Exception as e:
            raise CollaboratorError("linkify", key.module_path, e) from e

        return VersionSummary(
            version=cv.version,
            display_text=format_version(cv, self.config),
            link=link,
            commit_time_text=format_commit_time(cv.raw.commit_time, self.config) if cv.raw else "",
            vulnerabilities=self._vulns(key, cv, vuln_lookup, vuln_cache),
        )

    def _vulns(
        self,
        key: VersionGroupKey,
        cv: ClassifiedVersion,
        vuln_lookup: Optional[VulnLookup],
        vuln_cache: dict[str, list[VulnEntry]],
    ) -> list[VulnRef]:
        if vuln_lookup is None:
            return []

        stdlib = self.config.stdlib
        module_path = key.module_path
        if stdlib.is_stdlib(module_path):
            # A development build cannot be placed in a vulnerable range.
            if cv.is_pseudo:
                return []
            module_path = stdlib.vuln_module_path

        try:
            if module_path not in vuln_cache:
                vuln_cache[module_path] = list(vuln_lookup(module_path) or [])
            return vulns_for_version(vuln_cache[module_path], cv.version)
        except Exception as e:
            raise CollaboratorError("vuln_lookup", module_path, e) from e
