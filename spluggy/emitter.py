# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Registry source generation.

The generated file looks like:

	// Generated by spluggy on 2024-01-02 15:04:05
	package plugins
	import "example.com/core"
	import p0 "example.com/plugins/alpha"
	import p1 "example.com/plugins/beta"

	type Function func(*core.Context)(error)

	func Plugins() map[string]Function {

		plugins := make(map[string]Function)

		plugins["alpha"] = p0.Run
		plugins["beta"] = p1.Run

		return plugins
	}
"""

from __future__ import annotations

import datetime
import os
import re
from typing import Collection, Dict, Iterable, List, Optional

from . import errors
from .analyzer import ExportedFunction, short_name
from .errors import SpluggyError

GENERATOR = "spluggy"
REGISTRY_PACKAGE = "plugins"
FUNCTION_TYPE = "Function"
CONSTRUCTOR = "Plugins"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_OUT_NAME = "plugins.go"

_HEADER_RE = re.compile(r"^// Generated by \S+ on .*$")


def package_aliases(package_keys: Iterable[str], taken: Collection[str] = ()) -> Dict[str, str]:
	"""
	Assign `p0`, `p1`, ... to package keys in sorted order.

	Names in `taken` (short names of dependency imports) are skipped so the two
	kinds of imports never share a name.
	"""
	aliases: Dict[str, str] = {}
	i = 0
	for pkg in sorted(package_keys):
		while f"p{i}" in taken:
			i += 1
		aliases[pkg] = f"p{i}"
		i += 1
	return aliases


def package_import_path(pkg: str, base_pkg: str = "") -> str:
	if base_pkg:
		return f"{base_pkg}/{pkg}"
	return pkg


def registry_lines(
	fn: ExportedFunction,
	package_keys: Iterable[str],
	base_pkg: str = "",
	*,
	now: Optional[datetime.datetime] = None,
) -> List[str]:
	when = now if now is not None else datetime.datetime.now()
	keys = sorted(package_keys)
	aliases = package_aliases(keys, taken={short_name(dep) for dep in fn.deps})

	code: List[str] = [
		f"// Generated by {GENERATOR} on {when.strftime(TIMESTAMP_FORMAT)}",
		f"package {REGISTRY_PACKAGE}",
	]
	for dep in fn.deps:
		code.append(f'import "{dep}"')
	for pkg in keys:
		code.append(f'import {aliases[pkg]} "{package_import_path(pkg, base_pkg)}"')

	code.append(f"\ntype {FUNCTION_TYPE} func{fn.signature}\n")
	code.append(f"func {CONSTRUCTOR}() map[string]{FUNCTION_TYPE} {{\n")
	code.append(f"\tplugins := make(map[string]{FUNCTION_TYPE})\n")
	for pkg in keys:
		code.append(f'\tplugins["{pkg}"] = {aliases[pkg]}.{fn.name}')
	code.append("\n\treturn plugins\n}\n")
	return code


def render_registry(
	fn: ExportedFunction,
	package_keys: Iterable[str],
	base_pkg: str = "",
	*,
	now: Optional[datetime.datetime] = None,
) -> str:
	return "\n".join(registry_lines(fn, package_keys, base_pkg, now=now))


def strip_header(text: str) -> str:
	"""
	Drop the timestamped header line so two renders can be compared.

	Public helper for callers that regenerate a registry and want to know whether
	anything but the timestamp changed (for example a CI check on a committed
	`plugins.go`).
	"""
	lines = text.split("\n")
	if lines and _HEADER_RE.match(lines[0]):
		lines = lines[1:]
	return "\n".join(lines)


def write_registry(base: str, out_name: str, text: str) -> str:
	out = os.path.join(base, out_name)
	try:
		with open(out, "w", encoding="utf-8") as fh:
			fh.write(text)
	except OSError as err:
		raise SpluggyError(
			reason_code=errors.WRITE_FAILED,
			message=f"failed to write code: {err.strerror or err}",
			path=out,
		) from err
	return out
