# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass

PARSE_FAILED = "parse-failed"
WALK_FAILED = "walk-failed"
NO_COMMON_FUNCTION = "no-common-function"
MULTIPLE_COMMON_FUNCTIONS = "multiple-common-functions"
WRITE_FAILED = "write-failed"

# Failures the operator fixes by changing the command line.
USAGE_REASONS = frozenset({NO_COMMON_FUNCTION, MULTIPLE_COMMON_FUNCTIONS})


@dataclass(eq=False)
class SpluggyError(Exception):
	"""
	A fatal registry-generation failure.

	Every failure ends the run: nothing is retried and no partial registry is
	written. The CLI prints `format_human()` and exits non-zero.

	Not frozen: `__traceback__` is reassigned when the error passes through a
	context manager.
	"""

	reason_code: str
	message: str
	path: str | None = None
	line: int | None = None
	column: int | None = None

	def __str__(self) -> str:
		return self.format_human()

	@property
	def is_usage_error(self) -> bool:
		return self.reason_code in USAGE_REASONS

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.path:
			parts.append(f"path={self.path}")
		if self.line is not None:
			parts.append(f"line={self.line}")
		if self.column is not None:
			parts.append(f"column={self.column}")
		return " ".join(parts)
