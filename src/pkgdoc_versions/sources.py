# SPDX-License-Identifier: MIT
"""Version and vulnerability sources backed by JSON files.

The datastore that serves the index implements the same VersionSource
protocol; these file-backed versions feed the CLI and tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from .errors import ConfigError
from .grouping import v1_path
from .models import RawVersion
from .vulns import VulnEntry

_RECORDS = TypeAdapter(list[RawVersion])
_VULNS = TypeAdapter(dict[str, list[VulnEntry]])


class VersionSource(Protocol):
    """Returns every known version of every module containing a unit.

    The unit is named by its series path: its path with the module's major
    version suffix removed, so that example.com/foo/bar also finds
    example.com/foo/v2/bar.
    """

    def versions_for_unit(self, unit_path: str) -> list[RawVersion]: ...


class JSONVersionSource:
    """A VersionSource reading a JSON list of RawVersion objects."""

    def __init__(self, records: list[RawVersion]):
        self.records = records

    @classmethod
    def from_file(cls, path: str | Path) -> "JSONVersionSource":
        """Load records from a JSON file.

        Raises:
            ConfigError: If the file is not a valid list of records
            FileNotFoundError: If the file doesn't exist
        """
        try:
            return cls(_RECORDS.validate_json(Path(path).read_bytes()))
        except ValidationError as e:
            raise ConfigError(f"Invalid version records in {path}: {e}") from e

    def versions_for_unit(self, unit_path: str) -> list[RawVersion]:
        """Return the records whose unit has the series path unit_path."""
        return [r for r in self.records if v1_path(r.unit_path, r.module_path) == unit_path]


class VulnFile:
    """Vulnerability entries keyed by module path, loaded from JSON."""

    def __init__(self, entries: dict[str, list[VulnEntry]]):
        self.entries = entries

    @classmethod
    def from_file(cls, path: str | Path) -> "VulnFile":
        try:
            return cls(_VULNS.validate_json(Path(path).read_bytes()))
        except ValidationError as e:
            raise ConfigError(f"Invalid vulnerability entries in {path}: {e}") from e

    def __call__(self, module_path: str) -> list[VulnEntry]:
        return self.entries.get(module_path, [])
