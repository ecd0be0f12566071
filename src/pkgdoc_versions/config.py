# SPDX-License-Identifier: MIT
"""Configuration for version formatting and grouping.

A single VersionsConfig is built once (from defaults, the environment or a
pyproject.toml) and passed explicitly to the formatter, grouper and builder.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigError


@dataclass(frozen=True)
class StdlibConfig:
    """Naming conventions for the standard library module.

    Attributes:
        module_path: Module path under which the standard library is indexed
        major_label_prefix: Prefix for standard library epoch labels ("go" -> "go1")
        dev_label: Group label for development (pseudo-version) builds
        vuln_module_path: Module name the vulnerability database files stdlib under
        dev_branches: Branch names accepted as development versions
    """

    module_path: str = "std"
    major_label_prefix: str = "go"
    dev_label: str = "master"
    vuln_module_path: str = "stdlib"
    dev_branches: tuple[str, ...] = ("master", "dev.fuzz", "dev.boringcrypto")

    def is_stdlib(self, module_path: str) -> bool:
        """Return True if module_path denotes the standard library."""
        return module_path == self.module_path


@dataclass(frozen=True)
class VersionsConfig:
    """Versions tab configuration.

    Attributes:
        prerelease_display_limit: Longest pre-release tag shown unabbreviated
        commit_abbrev_len: Characters of a pseudo-version commit hash to display
        commit_time_format: strftime format for commit dates (day is appended
            without zero padding)
        stdlib: Standard library naming conventions
    """

    prerelease_display_limit: int = 16
    commit_abbrev_len: int = 7
    commit_time_format: str = "%b {day}, %Y"
    stdlib: StdlibConfig = field(default_factory=StdlibConfig)

    def __post_init__(self) -> None:
        if self.prerelease_display_limit < 1:
            raise ConfigError(
                f"prerelease_display_limit must be positive, got {self.prerelease_display_limit}"
            )
        if self.commit_abbrev_len < 1:
            raise ConfigError(f"commit_abbrev_len must be positive, got {self.commit_abbrev_len}")

    @classmethod
    def from_env(cls) -> "VersionsConfig":
        """Create configuration from PKGDOC_* environment variables."""
        values: dict[str, Any] = {}
        stdlib_values: dict[str, Any] = {}

        if limit := os.getenv("PKGDOC_PRERELEASE_DISPLAY_LIMIT"):
            values["prerelease_display_limit"] = _parse_int("PKGDOC_PRERELEASE_DISPLAY_LIMIT", limit)
        if abbrev := os.getenv("PKGDOC_COMMIT_ABBREV_LEN"):
            values["commit_abbrev_len"] = _parse_int("PKGDOC_COMMIT_ABBREV_LEN", abbrev)

        if module_path := os.getenv("PKGDOC_STDLIB_MODULE_PATH"):
            stdlib_values["module_path"] = module_path
        if dev_label := os.getenv("PKGDOC_STDLIB_DEV_LABEL"):
            stdlib_values["dev_label"] = dev_label
        if vuln_path := os.getenv("PKGDOC_STDLIB_VULN_MODULE_PATH"):
            stdlib_values["vuln_module_path"] = vuln_path

        return cls(stdlib=StdlibConfig(**stdlib_values), **values)

    @classmethod
    def from_pyproject(cls, path: str | Path) -> "VersionsConfig":
        """Load configuration from the [tool.pkgdoc] table of a pyproject.toml.

        Args:
            path: Path to pyproject.toml, or a directory containing one

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If the file doesn't exist
        """
        pyproject_path = Path(path)
        if pyproject_path.is_dir():
            pyproject_path = pyproject_path / "pyproject.toml"

        if not pyproject_path.exists():
            raise FileNotFoundError(f"pyproject.toml not found at {pyproject_path}")

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        return cls.from_pyproject_dict(pyproject)

    @classmethod
    def from_pyproject_dict(cls, pyproject: dict[str, Any]) -> "VersionsConfig":
        """Create configuration from a parsed pyproject.toml dictionary."""
        tool = pyproject.get("tool", {}).get("pkgdoc", {})
        stdlib_table = tool.get("stdlib", {})

        values: dict[str, Any] = {}
        for key in ("prerelease_display_limit", "commit_abbrev_len"):
            if key in tool:
                if not isinstance(tool[key], int) or isinstance(tool[key], bool):
                    raise ConfigError(f"tool.pkgdoc.{key} must be an integer")
                values[key] = tool[key]
        if "commit_time_format" in tool:
            values["commit_time_format"] = str(tool["commit_time_format"])

        stdlib_values: dict[str, Any] = {}
        for key in ("module_path", "major_label_prefix", "dev_label", "vuln_module_path"):
            if key in stdlib_table:
                stdlib_values[key] = str(stdlib_table[key])
        if "dev_branches" in stdlib_table:
            stdlib_values["dev_branches"] = tuple(stdlib_table["dev_branches"])

        return cls(stdlib=StdlibConfig(**stdlib_values), **values)


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


DEFAULT_CONFIG = VersionsConfig()
