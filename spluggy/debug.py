# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass(frozen=True)
class DebugLog:
	"""
	Verbose trace output, passed explicitly to every stage that reports.

	Lines go to `stream` (stderr when unset) prefixed with `[DEBUG]`. A quiet
	instance formats nothing.
	"""

	verbose: bool = False
	stream: Optional[TextIO] = None

	def __call__(self, fmt: str, *args: object) -> None:
		if not self.verbose:
			return
		msg = fmt % args if args else fmt
		print(f"[DEBUG] {msg}", file=self.stream if self.stream is not None else sys.stderr)


QUIET = DebugLog()
