# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Optional

from .aggregator import aggregate_packages, walk_sources
from .debug import DebugLog
from .emitter import DEFAULT_OUT_NAME, render_registry, write_registry
from .selector import select_common_function


@dataclass(frozen=True)
class GenerateOptions:
	base_dir: str
	func_name: str = ""
	base_pkg: str = ""
	out_name: str = DEFAULT_OUT_NAME
	verbose: bool = False


def normalize_base(base: str) -> str:
	if base.startswith("./"):
		base = base[2:] or "."
	if len(base) > 1:
		base = base.rstrip("/") or "/"
	return base


def generate_registry(
	opts: GenerateOptions,
	*,
	now: Optional[datetime.datetime] = None,
	log: Optional[DebugLog] = None,
) -> str:
	"""
	Scan `opts.base_dir`, pick the common function and write the registry.

	Returns the path written. Every failure raises `SpluggyError` before
	anything is written.
	"""
	if log is None:
		log = DebugLog(verbose=opts.verbose)
	base = normalize_base(opts.base_dir)

	pkgfuncs = aggregate_packages(walk_sources(base), base, log=log)
	fn = select_common_function(pkgfuncs, opts.func_name, log=log)
	text = render_registry(fn, pkgfuncs.keys(), opts.base_pkg, now=now)
	out = write_registry(base, opts.out_name, text)
	log("Plugins definition written to %s", out)
	return out
