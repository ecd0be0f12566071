# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for versions tab tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import pytest
from click.testing import CliRunner

from pkgdoc_versions import RawVersion

COMMIT_TIME = datetime(2019, 3, 11, 18, 33, 53, tzinfo=timezone.utc)
COMMIT_TIME_TEXT = "Mar 11, 2019"

MODULE_PATH_1 = "test.com/module"
MODULE_PATH_2 = "test.com/module/v2"

MakeRecord = Callable[..., RawVersion]


@pytest.fixture
def make_record() -> MakeRecord:
    """Return a factory for RawVersion records."""

    def _make(
        module_path: str,
        version: str,
        unit_path: Optional[str] = None,
        commit_time: datetime = COMMIT_TIME,
    ) -> RawVersion:
        return RawVersion(
            module_path=module_path,
            version=version,
            commit_time=commit_time,
            unit_path=unit_path if unit_path is not None else module_path,
        )

    return _make


@pytest.fixture
def module_linkify() -> Callable[[str, str], str]:
    """A linkify callback producing module page URLs."""
    return lambda module_path, version: f"/mod/{module_path}@{version}"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    """Write a JSON file of version records for test.com/module/foo."""
    records = [
        {"module_path": MODULE_PATH_1, "version": "v1.2.1", "unit_path": "test.com/module/foo"},
        {"module_path": MODULE_PATH_1, "version": "v1.3.0", "unit_path": "test.com/module/foo"},
        {
            "module_path": MODULE_PATH_1,
            "version": "v2.1.0+incompatible",
            "unit_path": "test.com/module/foo",
        },
        {"module_path": MODULE_PATH_1, "version": "not-a-version", "unit_path": "test.com/module/foo"},
        {"module_path": MODULE_PATH_2, "version": "v2.0.0", "unit_path": "test.com/module/v2/foo"},
        {"module_path": "other.com/unrelated", "version": "v1.0.0", "unit_path": "other.com/unrelated"},
    ]
    for record in records:
        record["commit_time"] = COMMIT_TIME.isoformat()

    path = tmp_path / "records.json"
    path.write_text(json.dumps(records))
    return path


@pytest.fixture
def vulns_file(tmp_path: Path) -> Path:
    """Write a JSON file of vulnerability entries for test.com/module."""
    entries = {
        MODULE_PATH_1: [
            {
                "id": "GO-2021-0001",
                "details": "Something bad",
                "ranges": [{"type": "SEMVER", "events": [{"introduced": "0"}, {"fixed": "1.3.0"}]}],
            }
        ]
    }
    path = tmp_path / "vulns.json"
    path.write_text(json.dumps(entries))
    return path
