"""Tests for plugin scan models."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcpkit.models.plugins import (
    KIND_PROFILES,
    FailureKind,
    LoadResult,
    LoadStatus,
    PluginFile,
    PluginKind,
    ScanReport,
    get_profile,
)


class TestPluginKind:
    def test_all_kinds(self):
        assert PluginKind.TOOL == "tool"
        assert PluginKind.PROMPT == "prompt"
        assert PluginKind.RESOURCE == "resource"

    def test_every_kind_has_a_profile(self):
        assert set(KIND_PROFILES) == set(PluginKind)


class TestKindProfile:
    def test_get_profile_accepts_string(self):
        assert get_profile("prompt") is KIND_PROFILES[PluginKind.PROMPT]

    def test_get_profile_rejects_unknown(self):
        with pytest.raises(ValueError):
            get_profile("widget")

    def test_tool_profile_fields(self):
        profile = get_profile(PluginKind.TOOL)
        assert profile.directory == "tools"
        assert "tool_definition" in profile.definition_attrs
        assert "tool_call" in profile.handler_attrs

    def test_exclude_patterns_per_extension(self):
        patterns = get_profile("resource").exclude_patterns([".py", ".pyc"])
        assert "base_resource.py" in patterns
        assert "base_resource.pyc" in patterns
        assert "*.test.py" in patterns
        assert "*.spec.pyc" in patterns
        assert "__init__.py" in patterns

    def test_exclude_patterns_extra_appended(self):
        patterns = get_profile("tool").exclude_patterns([".py"], ["legacy_*.py"])
        assert patterns[-1] == "legacy_*.py"

    def test_frozen(self):
        profile = get_profile("tool")
        with pytest.raises(Exception):
            profile.directory = "other"


class TestLoadResult:
    def test_loaded(self, make_plugin_file):
        class Plugin:
            name = "echo"

        result = LoadResult.loaded(make_plugin_file(), Plugin(), export_rule="from_default_export")
        assert result.ok
        assert result.status == LoadStatus.LOADED
        assert result.failure is None
        assert "echo" in result.message

    def test_failed(self, make_plugin_file):
        result = LoadResult.failed(make_plugin_file(), FailureKind.CONSTRUCTION, "boom")
        assert not result.ok
        assert result.instance is None
        assert result.failure == FailureKind.CONSTRUCTION

    def test_instance_not_serialized(self, make_plugin_file):
        result = LoadResult.loaded(make_plugin_file(), object())
        assert "instance" not in result.model_dump()


class TestScanReport:
    def _report(self, make_plugin_file) -> ScanReport:
        class Plugin:
            name = "a"

        return ScanReport(
            kind=PluginKind.TOOL,
            root=Path("/srv/dist/tools"),
            results=[
                LoadResult.loaded(make_plugin_file("a.py"), Plugin()),
                LoadResult.failed(make_plugin_file("b.py"), FailureKind.MODULE_EVALUATION, "bad"),
                LoadResult.skipped(make_plugin_file("c.py"), FailureKind.NO_USABLE_EXPORT, "none"),
            ],
        )

    def test_counts(self, make_plugin_file):
        report = self._report(make_plugin_file)
        assert report.loaded_count == 1
        assert report.failed_count == 1
        assert report.skipped_count == 1
        assert report.failure_count == 1
        assert report.passed is False

    def test_instances_and_failures(self, make_plugin_file):
        report = self._report(make_plugin_file)
        assert [i.name for i in report.instances] == ["a"]
        assert [f.file.name for f in report.failures] == ["b.py"]

    def test_root_error_counts_as_one_failure(self):
        report = ScanReport(kind=PluginKind.TOOL, root=Path("x"), root_error="missing")
        assert report.results == []
        assert report.failure_count == 1
        assert "missing" in report.summary()
        assert report.root_failure == FailureKind.DIRECTORY_MISSING

    def test_empty_report_passes(self):
        report = ScanReport(kind=PluginKind.PROMPT, root=Path("x"))
        assert report.passed
        assert report.summary() == "prompts: 0 loaded, 0 skipped, 0 failed"


class TestPluginFile:
    def test_frozen(self, make_plugin_file):
        plugin_file = make_plugin_file()
        with pytest.raises(Exception):
            plugin_file.name = "other.py"

    def test_fields(self):
        plugin_file = PluginFile(
            path=Path("/srv/dist/tools/sub/x.py"), relative_path="sub/x.py", name="x.py"
        )
        assert plugin_file.relative_path == "sub/x.py"
