# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import ast as pyast
from pathlib import Path
from typing import List, Optional, Tuple

from lark import Lark, Token, Tree, UnexpectedInput

from .ast import Field, FuncDecl, ImportSpec, Located, SourceFile

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class TerminatorInserter:
	"""
	Go's automatic semicolon insertion as a lark post-lexer.

	A newline becomes a `TERMINATOR` when the last token on the line is an
	identifier, a literal, `++`/`--` or a closing `)`/`]`/`}`. An explicit `;`
	is always a terminator. A block comment spanning lines acts like a newline;
	other comments vanish. End of input terminates the final line.
	"""

	always_accept = ("NEWLINE", "SEMI", "LINE_COMMENT", "BLOCK_COMMENT")

	TERMINABLE = {
		"NAME",
		"NUMBER",
		"STRING",
		"RAW_STRING",
		"RUNE",
		"RPAR",
		"RSQB",
		"RBRACE",
	}

	TERMINABLE_OPS = {"++", "--"}

	def __init__(self) -> None:
		self._reset()

	def _reset(self) -> None:
		self.can_terminate = False
		self.last_token: Optional[Token] = None

	def process(self, stream):
		self._reset()
		for token in stream:
			ttype = token.type
			if ttype == "LINE_COMMENT":
				continue
			if ttype == "BLOCK_COMMENT":
				if "\n" not in token.value:
					continue
				ttype = "NEWLINE"
			if ttype == "NEWLINE":
				if self.can_terminate:
					yield Token.new_borrow_pos("TERMINATOR", "\n", token)
					self.can_terminate = False
				continue
			if ttype == "SEMI":
				yield Token.new_borrow_pos("TERMINATOR", token.value, token)
				self.can_terminate = False
				continue
			yield token
			self.last_token = token
			self.can_terminate = self._is_terminable(token)

		if self.can_terminate and self.last_token is not None:
			yield Token.new_borrow_pos("TERMINATOR", "", self.last_token)
			self.can_terminate = False

	def _is_terminable(self, token: Token) -> bool:
		if token.type == "OP":
			return token.value in self.TERMINABLE_OPS
		return token.type in self.TERMINABLE


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="source_file",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(),
)


class SourceParseError(ValueError):
	"""
	A Go source file could not be parsed.

	Raised both for grammar failures reported by lark and for structural errors
	found while building the AST (for example mixing named and unnamed
	parameters).
	"""

	def __init__(self, message: str, *, loc: Optional[Located] = None) -> None:
		super().__init__(message)
		self.loc = loc


def parse_source(source: str) -> SourceFile:
	try:
		tree = _PARSER.parse(source)
	except UnexpectedInput as exc:
		line = getattr(exc, "line", -1)
		column = getattr(exc, "column", -1)
		loc = Located(line=line, column=column) if line and line > 0 else None
		raise SourceParseError(_first_line(str(exc)), loc=loc) from exc
	return _build_source_file(tree, source)


def _first_line(text: str) -> str:
	text = text.strip()
	return text.splitlines()[0] if text else "syntax error"


def _build_source_file(tree: Tree, source: str) -> SourceFile:
	package = ""
	imports: List[ImportSpec] = []
	funcs: List[FuncDecl] = []
	for child in tree.children:
		if not isinstance(child, Tree):
			continue
		kind = _name(child)
		if kind == "package_clause":
			package = _tokens(child, "NAME")[0].value
		elif kind == "import_decl":
			imports.extend(
				_build_import_spec(spec)
				for spec in child.children
				if isinstance(spec, Tree) and _name(spec) == "import_spec"
			)
		elif kind in ("func_decl", "method_decl"):
			funcs.append(_build_func(child, source))
	return SourceFile(package=package, imports=imports, funcs=funcs)


def _build_import_spec(tree: Tree) -> ImportSpec:
	alias: Optional[str] = None
	path = ""
	for child in tree.children:
		if _name(child) == "import_alias":
			alias = child.children[0].value
		elif _name(child) == "import_path":
			path = _decode_path(child.children[0])
	return ImportSpec(path=path, alias=alias, loc=_loc(tree))


def _decode_path(tok: Token) -> str:
	if tok.type == "RAW_STRING":
		return tok.value[1:-1]
	return pyast.literal_eval(tok.value)


def _build_func(tree: Tree, source: str) -> FuncDecl:
	receiver: Optional[str] = None
	name = ""
	params: List[Field] = []
	results: List[Field] = []
	has_body = False
	for child in tree.children:
		kind = _name(child)
		if kind == "NAME":
			name = child.value
		elif kind == "receiver":
			receiver = _text(child, source)
		elif kind == "signature":
			params, results = _build_signature(child, source)
		elif kind == "block":
			has_body = True
	return FuncDecl(
		name=name,
		params=params,
		results=results,
		loc=_loc(tree),
		receiver=receiver,
		has_body=has_body,
	)


def _build_signature(tree: Tree, source: str) -> Tuple[List[Field], List[Field]]:
	parts = [child for child in tree.children if isinstance(child, Tree)]
	params = _build_fields(parts[0], source)
	results: List[Field] = []
	if len(parts) > 1:
		result = parts[1]
		if _name(result) == "parameters":
			results = _build_fields(result, source)
		else:
			results = [Field(names=[], type_text=_text(result, source), loc=_loc(result))]
	return params, results


def _build_fields(tree: Tree, source: str) -> List[Field]:
	entries = [
		_split_entry(child)
		for child in tree.children
		if isinstance(child, Tree) and _name(child) == "param_entry"
	]
	if not any(name is not None for name, _ in entries):
		return [Field(names=[], type_text=_text(typ, source), loc=_loc(typ)) for _, typ in entries]

	# Named list: bare identifiers are further names for the next typed entry.
	fields: List[Field] = []
	pending: List[str] = []
	for name, typ in entries:
		if name is None:
			ident = _bare_ident(typ)
			if ident is None:
				raise SourceParseError("mixed named and unnamed parameters", loc=_loc(typ))
			pending.append(ident)
			continue
		pending.append(name.value)
		fields.append(Field(names=pending, type_text=_text(typ, source), loc=_loc_from_token(name)))
		pending = []
	if pending:
		raise SourceParseError("mixed named and unnamed parameters", loc=_loc(tree))
	return fields


def _split_entry(tree: Tree) -> Tuple[Optional[Token], Tree]:
	name = next((child for child in tree.children if isinstance(child, Token)), None)
	typ = next(child for child in tree.children if isinstance(child, Tree))
	return name, typ


def _bare_ident(tree: Tree) -> Optional[str]:
	if _name(tree) != "type_name" or len(tree.children) != 1:
		return None
	return tree.children[0].value


def _tokens(tree: Tree, ttype: str) -> List[Token]:
	return [child for child in tree.children if isinstance(child, Token) and child.type == ttype]


def _text(tree: Tree, source: str) -> str:
	return source[tree.meta.start_pos:tree.meta.end_pos]


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=meta.line, column=meta.column)


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)
