# SPDX-License-Identifier: MIT
"""Pydantic models for version records and the versions tab."""

from __future__ import annotations

from datetime import datetime
from itertools import groupby

from pydantic import BaseModel, ConfigDict, Field


class RawVersion(BaseModel):
    """A version of a module known to the index.

    One record per (module, version) pair. ``unit_path`` is the path of the
    queried package or directory inside that module version.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    module_path: str
    version: str
    commit_time: datetime
    unit_path: str


class VersionGroupKey(BaseModel):
    """Identifies one row of the versions tab."""

    model_config = ConfigDict(frozen=True)

    module_path: str
    major: str = Field(description='Epoch label such as "v1", "v2", "go1" or "master"')
    incompatible: bool = False


class VulnRef(BaseModel):
    """A vulnerability affecting a specific version."""

    model_config = ConfigDict(frozen=True)

    id: str
    details: str = ""


class VersionSummary(BaseModel):
    """One rendered version in a VersionList."""

    version: str
    display_text: str
    link: str
    commit_time_text: str
    vulnerabilities: list[VulnRef] = Field(default_factory=list)


class VersionList(BaseModel):
    """All versions of one epoch of one module, newest first."""

    key: VersionGroupKey
    entries: list[VersionSummary] = Field(default_factory=list)

    def minor_series(self) -> list[list[VersionSummary]]:
        """Split the entries into runs sharing the same major.minor.

        Templates render each run as one line of the version hierarchy.
        """
        return [list(run) for _, run in groupby(self.entries, key=_major_minor)]


class VersionsDetails(BaseModel):
    """Everything the versions tab template needs.

    Attributes:
        this_module: Epochs of the module being viewed
        incompatible_modules: "+incompatible" epochs of the module being viewed
        other_modules: Paths of other modules that contain the same unit,
            queried separately by the caller
    """

    this_module: list[VersionList] = Field(default_factory=list)
    incompatible_modules: list[VersionList] = Field(default_factory=list)
    other_modules: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.this_module or self.incompatible_modules or self.other_modules)


def _major_minor(summary: VersionSummary) -> str:
    core = summary.version.split("-", 1)[0].split("+", 1)[0]
    return core.rsplit(".", 1)[0]
