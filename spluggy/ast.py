# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass
class ImportSpec:
	path: str
	loc: Located
	alias: Optional[str] = None


@dataclass
class Field:
	"""
	One entry of a parameter or result list.

	`names` is empty for unnamed entries; `(a, b int)` is a single field with
	two names. `type_text` is the exact source spelling of the type, including
	a leading `...` for variadic parameters.
	"""

	names: List[str]
	type_text: str
	loc: Located

	@property
	def arity(self) -> int:
		return len(self.names) or 1


@dataclass
class FuncDecl:
	name: str
	params: List[Field]
	results: List[Field]
	loc: Located
	receiver: Optional[str] = None
	has_body: bool = True

	@property
	def is_method(self) -> bool:
		return self.receiver is not None


@dataclass
class SourceFile:
	package: str
	imports: List[ImportSpec] = field(default_factory=list)
	funcs: List[FuncDecl] = field(default_factory=list)
