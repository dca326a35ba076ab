# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import sys

from .emitter import DEFAULT_OUT_NAME
from .errors import SpluggyError
from .generate import GenerateOptions, generate_registry


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="spluggy",
		description="Generate a Go plugin registry from packages that share one exported function",
	)
	p.add_argument("directory", nargs="*", help="Base directory holding one sub-package per plugin")
	p.add_argument("-func", "--func", dest="func_name", default="", help="The interface function name")
	p.add_argument("-pkg", "--pkg", dest="base_pkg", default="", help="The base package")
	p.add_argument("-out", "--out", dest="out_name", default=DEFAULT_OUT_NAME, help="Output file name")
	p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
	return p


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)
	if len(args.directory) != 1:
		p.error("wrong number of arguments, you need to specify a directory")

	opts = GenerateOptions(
		base_dir=args.directory[0],
		func_name=args.func_name,
		base_pkg=args.base_pkg,
		out_name=args.out_name,
		verbose=bool(args.verbose),
	)
	try:
		generate_registry(opts)
	except SpluggyError as err:
		if err.is_usage_error:
			p.error(err.format_human())
		print(err.format_human(), file=sys.stderr)
		return 1
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
