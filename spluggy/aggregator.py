# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import os
from typing import Dict, Iterable, Iterator, List, Tuple

from . import errors
from .analyzer import ExportedFunction, Visibility, analyze_source, is_publicly_visible
from .debug import QUIET, DebugLog
from .errors import SpluggyError
from .parser import SourceParseError

SOURCE_SUFFIX = ".go"

PackageFunctions = Dict[str, List[ExportedFunction]]


def package_key(base: str, path: str) -> str:
	"""
	Derive the package key of `path` relative to the scanned `base` directory.

	The file name is dropped and surrounding `/` and `.` are trimmed, so files
	directly inside `base` get the empty key.
	"""
	rel = path[len(base):] if path.startswith(base) else path
	parts = rel.split("/")
	return "/".join(parts[:-1]).strip("/.")


def walk_sources(base: str) -> Iterator[Tuple[str, str]]:
	"""
	Yield `(path, text)` for every Go source file below `base`.

	Directories and files are visited in lexicographic order and paths use `/`
	separators. Other files are skipped without being opened. Any listing
	error, or a read error on a source file, aborts the walk.
	"""

	def _fail(err: OSError) -> None:
		raise SpluggyError(
			reason_code=errors.WALK_FAILED,
			message=err.strerror or str(err),
			path=err.filename,
		) from err

	if not os.path.isdir(base):
		raise SpluggyError(reason_code=errors.WALK_FAILED, message="not a directory", path=base)

	for dirpath, dirnames, filenames in os.walk(base, onerror=_fail):
		dirnames.sort()
		for fname in sorted(filenames):
			if not fname.endswith(SOURCE_SUFFIX):
				continue
			path = os.path.join(dirpath, fname).replace(os.sep, "/")
			try:
				with open(path, encoding="utf-8") as fh:
					text = fh.read()
			except (OSError, UnicodeDecodeError) as err:
				raise SpluggyError(reason_code=errors.WALK_FAILED, message=str(err), path=path) from err
			yield path, text


def aggregate_packages(
	sources: Iterable[Tuple[str, str]],
	base: str,
	*,
	visible: Visibility = is_publicly_visible,
	log: DebugLog = QUIET,
) -> PackageFunctions:
	"""
	Group exported functions by package key.

	Every package that holds at least one source file gets an entry, even when
	none of its functions are exported.
	"""
	pkgfuncs: PackageFunctions = {}
	for path, text in sources:
		if not path.endswith(SOURCE_SUFFIX):
			continue
		pkg = package_key(base, path)
		if pkg == "":
			continue
		log("About to process file %s (pkg %s)", path, pkg)
		try:
			funcs = analyze_source(text, visible=visible, log=log)
		except SourceParseError as err:
			raise SpluggyError(
				reason_code=errors.PARSE_FAILED,
				message=f"failed to parse source: {err}",
				path=path,
				line=err.loc.line if err.loc is not None else None,
				column=err.loc.column if err.loc is not None else None,
			) from err
		log("resulted functions: %s", funcs)
		pkgfuncs.setdefault(pkg, []).extend(funcs)
	log("pkgfuncs: %s", pkgfuncs)
	return pkgfuncs
