# SPDX-License-Identifier: MIT
"""Unit tests for epoch grouping and series paths."""

import logging

import pytest

from pkgdoc_versions import (
    EpochGrouper,
    StdlibConfig,
    VersionGroupKey,
    VersionsConfig,
    classify,
    path_in_version,
    series_path,
    v1_path,
)


class TestSeriesPaths:
    """Tests for series_path, v1_path and path_in_version."""

    @pytest.mark.parametrize(
        "module_path,expected",
        [
            ("example.com/foo", "example.com/foo"),
            ("example.com/foo/v2", "example.com/foo"),
            ("example.com/foo/v10", "example.com/foo"),
            ("example.com/foo/v1", "example.com/foo/v1"),
            ("example.com/foo/v0", "example.com/foo/v0"),
            ("example.com/foo/v02", "example.com/foo/v02"),
            ("example.com/foov2", "example.com/foov2"),
        ],
    )
    def test_series_path(self, module_path, expected):
        """Test removing the major version suffix."""
        assert series_path(module_path) == expected

    @pytest.mark.parametrize(
        "path,module_path,expected",
        [
            ("example.com/foo/bar", "example.com/foo", "example.com/foo/bar"),
            ("example.com/foo/v2/bar", "example.com/foo/v2", "example.com/foo/bar"),
            ("example.com/foo/v2", "example.com/foo/v2", "example.com/foo"),
            ("net/http", "std", "net/http"),
            ("example.com/foobar", "example.com/foo", "example.com/foobar"),
        ],
    )
    def test_v1_path(self, path, module_path, expected):
        """Test computing the series-relative path of a unit."""
        assert v1_path(path, module_path) == expected

    @pytest.mark.parametrize(
        "v1,module_path,expected",
        [
            ("foo.com/bar/baz", "foo.com/bar", "foo.com/bar/baz"),
            ("foo.com/bar/baz", "foo.com/bar/v2", "foo.com/bar/v2/baz"),
            ("foo.com/bar/baz", "foo.com/v3", "foo.com/v3/bar/baz"),
            ("foo.com/bar/baz", "foo.com/bar/baz/v3", "foo.com/bar/baz/v3"),
            ("net/http", "std", "net/http"),
            ("foo.com/barn", "foo.com/bar/v2", "foo.com/barn"),
        ],
    )
    def test_path_in_version(self, v1, module_path, expected):
        """Test locating a unit inside another module of its series."""
        assert path_in_version(v1, module_path) == expected


class TestEpochGrouper:
    """Tests for EpochGrouper.group."""

    def _classify(self, records):
        return [classify(r.version, r) for r in records]

    def test_empty(self):
        """Test that empty input gives an empty grouping."""
        grouping = EpochGrouper().group("test.com/module", "test.com/module", [])
        assert grouping.this_module == {}
        assert grouping.incompatible == {}
        assert grouping.other_modules == []
        assert grouping.mismatched == []

    def test_groups_by_major(self, make_record):
        """Test that the target module's versions are keyed by major version."""
        versions = self._classify(
            [
                make_record("test.com/module", "v1.2.3"),
                make_record("test.com/module", "v1.3.0"),
                make_record("test.com/module", "v0.9.0"),
            ]
        )
        grouping = EpochGrouper().group("test.com/module", "test.com/module", versions)

        v1 = VersionGroupKey(module_path="test.com/module", major="v1")
        v0 = VersionGroupKey(module_path="test.com/module", major="v0")
        assert set(grouping.this_module) == {v0, v1}
        assert [cv.version for cv in grouping.this_module[v1]] == ["v1.2.3", "v1.3.0"]

    def test_incompatible_bucket(self, make_record):
        """Test that +incompatible versions are kept apart."""
        versions = self._classify(
            [
                make_record("test.com/module", "v1.0.0"),
                make_record("test.com/module", "v2.1.0+incompatible"),
                make_record("test.com/module", "v2.0.0+incompatible"),
            ]
        )
        grouping = EpochGrouper().group("test.com/module", "test.com/module", versions)

        key = VersionGroupKey(module_path="test.com/module", major="v2", incompatible=True)
        assert list(grouping.incompatible) == [key]
        assert len(grouping.incompatible[key]) == 2
        assert all(not k.incompatible for k in grouping.this_module)

    def test_other_modules(self, make_record):
        """Test that other modules of the series are collected as sorted distinct paths."""
        unit = "test.com/module/foo"
        versions = self._classify(
            [
                make_record("test.com/module", "v1.2.1", unit),
                make_record("test.com/module/v2", "v2.0.0", "test.com/module/v2/foo"),
                make_record("test.com/module/v2", "v2.2.1-alpha.1", "test.com/module/v2/foo"),
                make_record("test.com", "v1.2.1", unit),
            ]
        )
        grouping = EpochGrouper().group("test.com/module", unit, versions)
        assert grouping.other_modules == ["test.com", "test.com/module/v2"]
        assert grouping.mismatched == []

    def test_mismatched_series_excluded(self, make_record, caplog):
        """Test that versions from another series are excluded and logged."""
        versions = self._classify(
            [
                make_record("test.com/module", "v1.0.0", "test.com/module/foo"),
                make_record("other.com/module", "v1.0.0", "other.com/module/foo"),
            ]
        )
        with caplog.at_level(logging.WARNING, logger="pkgdoc_versions.grouping"):
            grouping = EpochGrouper().group("test.com/module", "test.com/module/foo", versions)

        assert [cv.raw.module_path for cv in grouping.mismatched] == ["other.com/module"]
        assert grouping.other_modules == []
        assert "mismatching series" in caplog.text

    def test_missing_record(self):
        """Test that a version without its record is rejected."""
        with pytest.raises(ValueError):
            EpochGrouper().group("test.com/module", "test.com/module", [classify("v1.0.0")])

    def test_every_version_accounted_for(self, make_record):
        """Test that each version lands in exactly one bucket."""
        unit = "test.com/module/foo"
        records = [
            make_record("test.com/module", "v1.0.0", unit),
            make_record("test.com/module", "v2.0.0+incompatible", unit),
            make_record("test.com/module/v3", "v3.0.0", "test.com/module/v3/foo"),
            make_record("other.com/x", "v1.0.0", "other.com/x"),
        ]
        grouping = EpochGrouper().group("test.com/module", unit, self._classify(records))
        grouped = sum(len(v) for v in grouping.this_module.values())
        grouped += sum(len(v) for v in grouping.incompatible.values())
        assert grouped == 2
        assert grouping.other_modules == ["test.com/module/v3"]
        assert len(grouping.mismatched) == 1


class TestStdlibLabels:
    """Tests for standard library epoch labels."""

    def test_tagged_and_dev(self, make_record):
        """Test that tagged releases are go{major} and pseudo-versions are dev builds."""
        versions = [
            classify(r.version, r)
            for r in [
                make_record("std", "v1.12.5", "net/http"),
                make_record("std", "v0.0.0-20190904010203-89fb59e2e920", "net/http"),
            ]
        ]
        grouping = EpochGrouper().group("std", "net/http", versions)
        assert {k.major for k in grouping.this_module} == {"go1", "master"}

    def test_custom_labels(self, make_record):
        """Test configured standard library naming."""
        config = VersionsConfig(
            stdlib=StdlibConfig(module_path="stdlib", major_label_prefix="golang", dev_label="tip")
        )
        grouper = EpochGrouper(config)
        assert grouper.major_label("stdlib", classify("v1.2.0")) == "golang1"
        assert grouper.major_label("stdlib", classify("v0.0.0-20190904010203-89fb59e2e920")) == "tip"
        assert grouper.major_label("std", classify("v1.2.0")) == "v1"
