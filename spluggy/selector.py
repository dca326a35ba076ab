# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Pick the interface function: the exported name every package provides.

Packages are visited in sorted key order, so both the candidate list and the
descriptor chosen as the signature source are stable between runs. Presence is
counted once per package; a package exporting a name twice (say from files for
different build targets) is reported in the trace but still counts once.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from . import errors
from .analyzer import ExportedFunction
from .debug import QUIET, DebugLog
from .errors import SpluggyError


def count_packages_per_name(
	pkgfuncs: Mapping[str, Sequence[ExportedFunction]],
	func_name: str = "",
	*,
	log: DebugLog = QUIET,
) -> Dict[str, int]:
	counts: Dict[str, int] = {}
	for pkg in sorted(pkgfuncs):
		seen = set()
		for fn in pkgfuncs[pkg]:
			if func_name and fn.name != func_name:
				continue
			if fn.name in seen:
				log("package %s exports %s more than once", pkg, fn.name)
				continue
			seen.add(fn.name)
			counts[fn.name] = counts.get(fn.name, 0) + 1
	return counts


def find_candidates(
	pkgfuncs: Mapping[str, Sequence[ExportedFunction]],
	func_name: str = "",
	*,
	log: DebugLog = QUIET,
) -> List[str]:
	counts = count_packages_per_name(pkgfuncs, func_name, log=log)
	cands = sorted(name for name, n in counts.items() if n == len(pkgfuncs))
	log("cands: %s", cands)
	return cands


def select_common_function(
	pkgfuncs: Mapping[str, Sequence[ExportedFunction]],
	func_name: str = "",
	*,
	log: DebugLog = QUIET,
) -> ExportedFunction:
	"""
	Return the descriptor of the single function name common to all packages.

	The descriptor comes from the first package (in key order) and is trusted
	as the signature for all of them; other packages are not cross-checked.
	"""
	cands = find_candidates(pkgfuncs, func_name, log=log)
	if not cands:
		raise SpluggyError(
			reason_code=errors.NO_COMMON_FUNCTION,
			message="cannot find any common public function in all packages",
		)
	if len(cands) > 1:
		raise SpluggyError(
			reason_code=errors.MULTIPLE_COMMON_FUNCTIONS,
			message=f"multiple common public functions ({', '.join(cands)}), specify one with -func",
		)

	fname = cands[0]
	for pkg in sorted(pkgfuncs):
		for fn in pkgfuncs[pkg]:
			if fn.name == fname:
				log("interface function is %s: %s", fname, fn)
				return fn
	raise AssertionError("unreachable")
