# SPDX-License-Identifier: MIT
"""Vulnerability entries and affected-range containment.

Entries follow the OSV shape: each entry lists ranges of events, and an
event either introduces the vulnerability at a version ("0" meaning the
beginning of time) or fixes it. A vulnerability lookup returns every entry
for a module; deciding which entries affect a particular version is done
here with affects_version.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from .compare import compare_versions
from .models import VulnRef
from .semver import is_valid_version
from .stdlib import expand_short_version

RANGE_TYPE_SEMVER = "SEMVER"


class RangeEvent(BaseModel):
    """An introduced or fixed event. Exactly one field is set."""

    model_config = ConfigDict(frozen=True)

    introduced: str = ""
    fixed: str = ""


class AffectedRange(BaseModel):
    """A range of affected versions."""

    model_config = ConfigDict(frozen=True)

    type: str = RANGE_TYPE_SEMVER
    events: tuple[RangeEvent, ...] = ()


class VulnEntry(BaseModel):
    """A vulnerability database entry for one module."""

    model_config = ConfigDict(frozen=True)

    id: str
    details: str = ""
    ranges: tuple[AffectedRange, ...] = Field(default=())

    def to_ref(self) -> VulnRef:
        return VulnRef(id=self.id, details=self.details)


VulnLookup = Callable[[str], list[VulnEntry]]


def canonicalize_semver(s: str) -> str:
    """Return s with a "v" prefix, accepting bare, "v" and "go" prefixed versions.

    The shorthands "vX" and "vX.Y" are expanded to "vX.Y.0".

    Examples:
        >>> canonicalize_semver("go1.2.3")
        'v1.2.3'
        >>> canonicalize_semver("1.2.3")
        'v1.2.3'
        >>> canonicalize_semver("go1.21")
        'v1.21.0'
    """
    s = s.removeprefix("go")
    if not s.startswith("v"):
        s = "v" + s
    return expand_short_version(s)


def _compare_semver(v1: str, v2: str) -> int:
    """Compare two range versions after canonicalizing them.

    An invalid version sorts below every valid one and all invalid versions
    compare equal, so a bad event in a database entry never raises.
    """
    v1, v2 = canonicalize_semver(v1), canonicalize_semver(v2)
    valid1, valid2 = is_valid_version(v1), is_valid_version(v2)
    if valid1 and valid2:
        return compare_versions(v1, v2)
    return valid1 - valid2


def less_semver(v1: str, v2: str) -> bool:
    """Report whether v1 < v2, accepting any prefix canonicalize_semver does."""
    if not v1:
        return bool(v2)
    if not v2:
        return False
    return _compare_semver(v1, v2) < 0


def _event_order(e1: RangeEvent, e2: RangeEvent) -> int:
    # The beginning of time always sorts first.
    if e1.introduced == "0":
        return 0 if e2.introduced == "0" else -1
    if e2.introduced == "0":
        return 1
    v1 = e1.fixed or e1.introduced
    v2 = e2.fixed or e2.introduced
    return _compare_semver(v1, v2)


def contains_version(affected: AffectedRange, version: str) -> bool:
    """Report whether a semver range contains version.

    Assumes events in the range do not overlap. A non-semver range never
    contains anything; a semver range with no events contains everything.
    """
    if affected.type != RANGE_TYPE_SEMVER:
        return False
    if not affected.events:
        return True

    is_affected = False
    for event in sorted(affected.events, key=cmp_to_key(_event_order)):
        if not is_affected and event.introduced:
            is_affected = event.introduced == "0" or (
                _compare_semver(version, event.introduced) >= 0
            )
        elif is_affected and event.fixed:
            is_affected = _compare_semver(version, event.fixed) < 0
    return is_affected


def affects_version(ranges: tuple[AffectedRange, ...] | list[AffectedRange], version: str) -> bool:
    """Report whether any semver range in ranges contains version.

    No ranges at all, or no semver ranges among them, means every version
    is affected.

    Examples:
        >>> r = AffectedRange(events=(RangeEvent(introduced="0"), RangeEvent(fixed="2.0.0")))
        >>> affects_version([r], "v1.0.0")
        True
        >>> affects_version([r], "v2.0.0")
        False
    """
    if not ranges:
        return True
    semver_present = False
    for affected in ranges:
        if affected.type != RANGE_TYPE_SEMVER:
            continue
        semver_present = True
        if contains_version(affected, version):
            return True
    return not semver_present


def latest_fixed_version(ranges: tuple[AffectedRange, ...] | list[AffectedRange]) -> str:
    """Return the latest fixed version across semver ranges, or "".

    If the vulnerability is re-introduced after the latest fix, there is no
    latest fix and "" is returned.
    """
    latest = ""
    for affected in ranges:
        if affected.type != RANGE_TYPE_SEMVER:
            continue
        for event in affected.events:
            if event.fixed and less_semver(latest, event.fixed):
                latest = event.fixed
        for event in affected.events:
            if event.introduced and event.introduced != "0" and less_semver(latest, event.introduced):
                latest = ""
                break
    return latest


def vulns_for_version(entries: list[VulnEntry], version: str) -> list[VulnRef]:
    """Return references for the entries whose ranges contain version."""
    return [entry.to_ref() for entry in entries if affects_version(entry.ranges, version)]
