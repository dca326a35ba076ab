# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import datetime
from pathlib import Path

import pytest

from spluggy import errors
from spluggy.analyzer import ExportedFunction
from spluggy.emitter import package_aliases, render_registry, strip_header, write_registry
from spluggy.errors import SpluggyError

NOW = datetime.datetime(2024, 1, 2, 15, 4, 5)


def test_render_two_packages_without_deps() -> None:
	fn = ExportedFunction(name="Run", signature="(string)(error)")
	text = render_registry(fn, ["beta", "alpha"], "example.com/plugins", now=NOW)
	assert text == "\n".join(
		[
			"// Generated by spluggy on 2024-01-02 15:04:05",
			"package plugins",
			'import p0 "example.com/plugins/alpha"',
			'import p1 "example.com/plugins/beta"',
			"",
			"type Function func(string)(error)",
			"",
			"func Plugins() map[string]Function {",
			"",
			"\tplugins := make(map[string]Function)",
			"",
			'\tplugins["alpha"] = p0.Run',
			'\tplugins["beta"] = p1.Run',
			"",
			"\treturn plugins",
			"}",
			"",
		]
	)


def test_dependency_imports_come_first_and_package_path_defaults_to_key() -> None:
	fn = ExportedFunction(
		name="Handle",
		signature="(*core.Context, http.Header)",
		deps=("example.com/app/core", "net/http"),
	)
	lines = render_registry(fn, ["x/y"], now=NOW).split("\n")
	assert lines[2:5] == [
		'import "example.com/app/core"',
		'import "net/http"',
		'import p0 "x/y"',
	]
	assert "type Function func(*core.Context, http.Header)" in lines
	assert '\tplugins["x/y"] = p0.Handle' in lines


def test_package_aliases_skip_dependency_names() -> None:
	assert package_aliases(["b", "a", "c"]) == {"a": "p0", "b": "p1", "c": "p2"}
	assert package_aliases(["b", "a", "c"], taken={"p0", "p2"}) == {"a": "p1", "b": "p3", "c": "p4"}


def test_dependency_named_like_an_alias_does_not_collide() -> None:
	fn = ExportedFunction(name="Run", signature="(p0.T)", deps=("example.com/p0",))
	text = render_registry(fn, ["alpha", "beta"], now=NOW)
	assert 'import "example.com/p0"' in text
	assert 'import p1 "alpha"' in text
	assert 'import p2 "beta"' in text
	assert "import p0 " not in text


def test_output_is_stable_apart_from_timestamp() -> None:
	fn = ExportedFunction(name="Run", signature="()", deps=())
	first = render_registry(fn, {"b", "a"}, now=NOW)
	second = render_registry(fn, ["a", "b"], now=NOW + datetime.timedelta(hours=5))
	assert first != second
	assert strip_header(first) == strip_header(second)
	assert strip_header(first).startswith("package plugins\n")


def test_write_registry_overwrites(tmp_path: Path) -> None:
	(tmp_path / "plugins.go").write_text("old")
	out = write_registry(str(tmp_path), "plugins.go", "new")
	assert Path(out) == tmp_path / "plugins.go"
	assert (tmp_path / "plugins.go").read_text() == "new"


def test_write_failure_is_reported(tmp_path: Path) -> None:
	with pytest.raises(SpluggyError) as excinfo:
		write_registry(str(tmp_path / "missing"), "plugins.go", "x")
	assert excinfo.value.reason_code == errors.WRITE_FAILED
	assert excinfo.value.path.endswith("plugins.go")
