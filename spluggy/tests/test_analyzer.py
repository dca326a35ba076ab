# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io

import pytest

from spluggy.analyzer import (
	ExportedFunction,
	analyze_source,
	build_import_table,
	dependency_alias,
	is_publicly_visible,
)
from spluggy.debug import DebugLog
from spluggy.parser import SourceParseError, parse_source

PLUGIN_SRC = """package alpha

import (
	"context"
	"example.com/app/core"
	lg "github.com/acme/log"
)

func Run(ctx context.Context, opts ...*core.Option) (result map[string]*core.Value, err error) {
	return nil, nil
}

func Describe() string { return "alpha" }

func Pick(a, b []core.Item, c *core.Item) core.Item { return *c }

func Quiet(l lg.Logger) {}

func helper() {}

func (p *Plugin) Start() error { return nil }
"""


def test_one_descriptor_per_exported_function() -> None:
	funcs = analyze_source(PLUGIN_SRC)
	assert [f.name for f in funcs] == ["Run", "Describe", "Pick", "Quiet"]


def test_signature_text_and_deps() -> None:
	funcs = {f.name: f for f in analyze_source(PLUGIN_SRC)}
	assert funcs["Run"] == ExportedFunction(
		name="Run",
		signature="(context.Context, ...*core.Option)(map[string]*core.Value, error)",
		deps=("context", "example.com/app/core"),
	)
	assert funcs["Describe"].signature == "()(string)"
	assert funcs["Describe"].deps == ()


def test_grouped_names_repeat_their_type() -> None:
	funcs = {f.name: f for f in analyze_source(PLUGIN_SRC)}
	assert funcs["Pick"].signature == "([]core.Item, []core.Item, *core.Item)(core.Item)"
	assert funcs["Pick"].deps == ("example.com/app/core",)


def test_signature_without_results_has_only_parameter_group() -> None:
	funcs = analyze_source("package x\n\nfunc Init() {}\n\nfunc Set(v  int) {}\n")
	assert [f.signature for f in funcs] == ["()", "(int)"]


def test_deps_are_deduplicated_in_first_seen_order() -> None:
	funcs = analyze_source(
		"""package x

import (
	"example.com/b/other"
	"example.com/a/pkg"
)

func F(a pkg.A, b *other.B, c []pkg.C) (pkg.D, *other.E) { return nil, nil }
"""
	)
	assert funcs[0].deps == ("example.com/a/pkg", "example.com/b/other")


@pytest.mark.parametrize("type_text", ["pkg.Type", "*pkg.Type", "[]pkg.Type", "[]*pkg.Type", "**pkg.Type"])
def test_wrapper_syntax_is_stripped_before_lookup(type_text: str) -> None:
	src = f'package x\nimport "example.com/pkg"\nfunc F(v {type_text}) {{}}\n'
	assert analyze_source(src)[0].deps == ("example.com/pkg",)


@pytest.mark.parametrize("type_text", ["map[string]pkg.Type", "func(pkg.Type)", "chan pkg.Type", "[4]pkg.Type"])
def test_only_the_outermost_component_counts(type_text: str) -> None:
	src = f'package x\nimport "example.com/pkg"\nfunc F(v {type_text}) {{}}\n'
	assert analyze_source(src)[0].deps == ()


def test_explicit_import_alias_is_not_resolved() -> None:
	funcs = {f.name: f for f in analyze_source(PLUGIN_SRC)}
	assert funcs["Quiet"].signature == "(lg.Logger)"
	assert funcs["Quiet"].deps == ()


def test_import_table_uses_last_path_segment() -> None:
	table = build_import_table(parse_source('package x\nimport (\n"a/b/c"\nz "d/e"\n"f"\n)\n').imports)
	assert table == {"c": "a/b/c", "e": "d/e", "f": "f"}


def test_dependency_alias() -> None:
	assert dependency_alias("*core.Option") == "core"
	assert dependency_alias("...*core.Option") == "core"
	assert dependency_alias("[]string") == "string"
	assert dependency_alias("map[string]core.V") == "map[string]core"


def test_visibility_rule_is_replaceable() -> None:
	assert is_publicly_visible("Run")
	assert not is_publicly_visible("run")
	assert not is_publicly_visible("_Run")
	funcs = analyze_source(PLUGIN_SRC, visible=lambda name: name.startswith("h"))
	assert [f.name for f in funcs] == ["helper"]


def test_parse_failure_propagates() -> None:
	with pytest.raises(SourceParseError):
		analyze_source("package x\nfunc F( {}\n")


def test_trace_goes_to_debug_log() -> None:
	out = io.StringIO()
	analyze_source(PLUGIN_SRC, log=DebugLog(verbose=True, stream=out))
	text = out.getvalue()
	assert "[DEBUG] Imports:" in text
	assert "[DEBUG] appending dep: core (...*core.Option)" in text
