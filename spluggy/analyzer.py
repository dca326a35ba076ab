# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Exported-function extraction for one Go source file.

For every exported top-level function the analyzer records the exact source
spelling of its parameter and result types (the registry re-uses it verbatim
as a function type) and the imports those types need.

Dependency policy: only the outermost named component of each type counts.
The text before the first `.` is stripped of leading `[`, `]` and `*` and
looked up in the file's import table, so `pkg.T`, `*pkg.T` and `[]pkg.T` all
depend on `pkg` while `map[string]pkg.T` or `func(pkg.T)` depend on nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from .ast import Field, FuncDecl, ImportSpec
from .debug import QUIET, DebugLog
from .parser import parse_source

ImportTable = Dict[str, str]
Visibility = Callable[[str], bool]


@dataclass(frozen=True)
class ExportedFunction:
	name: str
	signature: str
	deps: Tuple[str, ...] = ()


def is_publicly_visible(identifier: str) -> bool:
	"""Go visibility: an identifier is exported when it starts with an uppercase letter."""
	return identifier[:1].isupper()


def build_import_table(imports: Iterable[ImportSpec]) -> ImportTable:
	"""
	Map each import's short name to its full path.

	The short name is always the last path segment; explicit aliases are not
	consulted. A later import with the same last segment replaces an earlier one.
	"""
	table: ImportTable = {}
	for spec in imports:
		table[short_name(spec.path)] = spec.path
	return table


def short_name(import_path: str) -> str:
	return import_path.split("/")[-1]


def analyze_source(
	source: str,
	*,
	visible: Visibility = is_publicly_visible,
	log: DebugLog = QUIET,
) -> List[ExportedFunction]:
	"""
	Parse `source` and describe its exported top-level functions in declaration order.

	Methods are skipped. Raises `SourceParseError` when the file does not parse.
	"""
	parsed = parse_source(source)
	imports = build_import_table(parsed.imports)
	log("Imports: %s", imports)

	funcs: List[ExportedFunction] = []
	for decl in parsed.funcs:
		if decl.is_method or not visible(decl.name):
			continue
		funcs.append(describe_function(decl, imports, log=log))
	return funcs


def describe_function(decl: FuncDecl, imports: ImportTable, *, log: DebugLog = QUIET) -> ExportedFunction:
	signature = "(" + ", ".join(_type_texts(decl.params)) + ")"
	if decl.results:
		signature += "(" + ", ".join(_type_texts(decl.results)) + ")"

	deps: List[str] = []
	added = set()
	for field in list(decl.params) + list(decl.results):
		part = dependency_alias(field.type_text)
		dep = imports.get(part)
		if dep is None or dep in added:
			continue
		added.add(dep)
		log("appending dep: %s (%s)", part, field.type_text)
		deps.append(dep)
	return ExportedFunction(name=decl.name, signature=signature, deps=tuple(deps))


def dependency_alias(type_text: str) -> str:
	"""Return the import short name a type's outermost component refers to (may be unresolvable)."""
	text = type_text[3:] if type_text.startswith("...") else type_text
	return text.split(".", 1)[0].lstrip("[]*")


def _type_texts(fields: Iterable[Field]) -> Iterator[str]:
	# `a, b int` yields `int` twice so the arity matches the declaration.
	for field in fields:
		for _ in range(field.arity):
			yield field.type_text
